"""Tests for the Base64URL/JSON codec."""

import pytest

from compact_jwt.codec import base64url_decode, base64url_encode, json_decode, json_encode
from compact_jwt.errors import DecodeError


def test_encode_strips_padding():
    assert base64url_encode(b"{}") == "e30"
    assert "=" not in base64url_encode(b"a")


def test_encode_uses_url_safe_alphabet():
    encoded = base64url_encode(b"\xfb\xff\xbf")
    assert encoded == "-_-_"


def test_decode_without_padding():
    assert base64url_decode("e30") == b"{}"


def test_decode_accepts_correct_padding():
    assert base64url_decode("YQ==") == b"a"


def test_decode_accepts_bytes():
    assert base64url_decode(b"e30") == b"{}"


def test_decode_empty_string():
    assert base64url_decode("") == b""


@pytest.mark.parametrize("bad", ["e3+0", "e3/0", "e3 0", "e30!", "é30"])
def test_decode_rejects_foreign_characters(bad):
    with pytest.raises(DecodeError):
        base64url_decode(bad)


@pytest.mark.parametrize("bad", ["YQ=", "Y===", "=", "e=30", "abcde"])
def test_decode_rejects_bad_padding_or_length(bad):
    with pytest.raises(DecodeError):
        base64url_decode(bad)


def test_json_encode_is_compact_and_ordered():
    assert json_encode({"alg": "HS256", "typ": "JWT"}) == b'{"alg":"HS256","typ":"JWT"}'


def test_json_encode_keeps_unicode():
    assert json_encode({"name": "Zoë"}) == '{"name":"Zoë"}'.encode("utf-8")


def test_json_decode_object():
    assert json_decode(b'{"name":"Kyle"}') == {"name": "Kyle"}


def test_json_decode_invalid_json():
    with pytest.raises(DecodeError) as exc:
        json_decode(b"{not json")
    assert "Invalid JSON" in exc.value.message


def test_json_decode_rejects_non_object():
    with pytest.raises(DecodeError) as exc:
        json_decode(b"[1, 2]")
    assert "JSON object" in str(exc.value)


def test_json_decode_invalid_utf8():
    with pytest.raises(DecodeError):
        json_decode(b"\xff\xfe")


def test_decode_rejects_non_canonical_trailing_bits():
    # "YR" carries the same byte as "YQ" with a stray low bit set
    assert base64url_decode("YQ") == b"a"
    with pytest.raises(DecodeError):
        base64url_decode("YR")


def test_json_decode_oversized_integer():
    with pytest.raises(DecodeError, match="Invalid JSON"):
        json_decode(b'{"x":' + b"9" * 5000 + b"}")


def test_json_decode_deep_nesting():
    with pytest.raises(DecodeError, match="Invalid JSON"):
        json_decode(b'{"x":' + b"[" * 100000 + b"]" * 100000 + b"}")
