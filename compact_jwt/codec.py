"""Base64URL and JSON segment codec."""

import base64
import binascii
import json
import re
from typing import Any, Mapping

from .errors import DecodeError

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*(={0,2})")


def base64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded Base64URL text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(data: str | bytes) -> bytes:
    """Decode Base64URL text, with or without trailing padding.

    Raises:
        DecodeError: If the input holds characters outside the Base64URL
            alphabet, its padding/length is impossible, or its trailing bits
            are not zero.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("ascii")
        except UnicodeDecodeError:
            raise DecodeError("Invalid base64url encoding")

    match = _B64URL_RE.fullmatch(data)
    if match is None:
        raise DecodeError("Invalid base64url encoding")

    if match.group(1):
        # Padded input must be a whole number of quanta
        if len(data) % 4:
            raise DecodeError("Invalid base64url padding")
    elif len(data) % 4 == 1:
        raise DecodeError("Invalid base64url length")

    try:
        decoded = base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64url encoding: {e}") from e

    # Unused trailing bits must be zero so each byte string has one encoding
    if base64url_encode(decoded) != data.rstrip("="):
        raise DecodeError("Invalid base64url encoding: non-canonical trailing bits")
    return decoded


def json_encode(mapping: Mapping[str, Any]) -> bytes:
    """Serialize a mapping as compact UTF-8 JSON, keeping insertion order."""
    return json.dumps(dict(mapping), separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def json_decode(data: bytes) -> dict[str, Any]:
    """Parse a JSON object.

    Raises:
        DecodeError: If the bytes are not UTF-8 JSON or the top level value
            is not an object.
    """
    try:
        value = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DecodeError(f"Invalid UTF-8 in segment: {e}") from e
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"Invalid JSON in segment: {e}") from e

    if not isinstance(value, dict):
        raise DecodeError(
            f"Segment must decode to a JSON object, got {type(value).__name__}"
        )
    return value
