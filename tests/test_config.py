"""Tests for ValidationConfig and its JSON file helpers."""

import json

import pytest

from compact_jwt import Algorithm, ConfigError, ValidationConfig, load_config, save_config


def test_defaults():
    config = ValidationConfig()
    assert config.algorithms == ["HS256"]
    assert config.leeway == 0
    assert config.issuer is None
    assert config.audience is None
    assert config.verify is True


def test_from_dict_camel_case():
    config = ValidationConfig.from_dict({"verifySignature": False, "iss": "a", "aud": "b"})
    assert config.verify is False
    assert config.issuer == "a"
    assert config.audience == "b"


def test_from_dict_single_algorithm_string():
    assert ValidationConfig.from_dict({"algorithms": "HS384"}).algorithms == ["HS384"]


@pytest.mark.parametrize("data", [{"algorithms": [1]}, {"leeway": -1}, {"leeway": "5"}, {"leeway": True}])
def test_from_dict_rejects_bad_values(data):
    with pytest.raises(ConfigError):
        ValidationConfig.from_dict(data)


def test_algorithms_for():
    config = ValidationConfig(algorithms=["HS256", "none"])
    assert config.algorithms_for("k") == [Algorithm.hs256("k"), Algorithm.none()]


def test_algorithms_for_unknown_name():
    with pytest.raises(ConfigError, match="Unsupported algorithm"):
        ValidationConfig(algorithms=["ES256"]).algorithms_for("k")


def test_decode_kwargs():
    config = ValidationConfig(leeway=5, issuer="i", audience="a", verify=False)
    assert config.decode_kwargs() == {"verify": False, "leeway": 5, "issuer": "i", "audience": "a"}


def test_load_missing_file_returns_defaults(tmp_path):
    assert load_config(tmp_path / "missing.json") == ValidationConfig()


def test_save_and_load(tmp_path):
    path = tmp_path / "jwt.json"
    config = ValidationConfig(algorithms=["HS512"], leeway=30, issuer="fuller.li")
    save_config(config, path)
    assert json.loads(path.read_text())["leeway"] == 30
    assert load_config(path) == config


def test_load_invalid_json(tmp_path):
    path = tmp_path / "jwt.json"
    path.write_text("{nope")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_config(path)


def test_load_non_object(tmp_path):
    path = tmp_path / "jwt.json"
    path.write_text("[]")
    with pytest.raises(ConfigError):
        load_config(path)


def test_save_to_unwritable_path(tmp_path):
    with pytest.raises(ConfigError, match="Cannot write"):
        save_config(ValidationConfig(), tmp_path / "missing-dir" / "jwt.json")


@pytest.mark.parametrize(
    "data",
    [{"issuer": 5}, {"audience": ["a", "b"]}, {"verify": "false"}, {"verifySignature": 0}],
)
def test_from_dict_rejects_bad_identity_and_verify_values(data):
    with pytest.raises(ConfigError):
        ValidationConfig.from_dict(data)
