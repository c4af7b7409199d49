"""Configuration management for token validation."""

import json
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from .algorithms import Algorithm
from .errors import ConfigError

DEFAULT_ALGORITHMS = ["HS256"]


@dataclass
class ValidationConfig:
    """Settings for decoding and validating tokens."""

    algorithms: list[str] = field(default_factory=lambda: list(DEFAULT_ALGORITHMS))
    leeway: float = 0
    issuer: str | None = None
    audience: str | None = None
    verify: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValidationConfig":
        """Create config from dictionary.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        algorithms = data.get("algorithms", DEFAULT_ALGORITHMS)
        if isinstance(algorithms, str):
            algorithms = [algorithms]
        if not isinstance(algorithms, list) or not all(isinstance(a, str) for a in algorithms):
            raise ConfigError("algorithms must be a list of algorithm names")

        leeway = data.get("leeway", 0)
        if isinstance(leeway, bool) or not isinstance(leeway, (int, float)) or leeway < 0:
            raise ConfigError("leeway must be a non-negative number of seconds")

        issuer = data.get("issuer", data.get("iss"))
        if issuer is not None and not isinstance(issuer, str):
            raise ConfigError("issuer must be a string")

        audience = data.get("audience", data.get("aud"))
        if audience is not None and not isinstance(audience, str):
            raise ConfigError("audience must be a string")

        verify = data.get("verify", data.get("verifySignature", True))
        if not isinstance(verify, bool):
            raise ConfigError("verify must be true or false")

        return cls(
            algorithms=list(algorithms),
            leeway=leeway,
            issuer=issuer,
            audience=audience,
            verify=verify,
        )

    def algorithms_for(self, key: str | bytes) -> list[Algorithm]:
        """Build the candidate algorithms, all sharing ``key``.

        Raises:
            ConfigError: If an algorithm name is not supported.
        """
        try:
            return [Algorithm.from_name(name, key) for name in self.algorithms]
        except ValueError as e:
            raise ConfigError(str(e)) from e

    def decode_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for :func:`compact_jwt.decode`."""
        return {
            "verify": self.verify,
            "leeway": self.leeway,
            "issuer": self.issuer,
            "audience": self.audience,
        }


def load_config(config_path: Path | str) -> ValidationConfig:
    """Load configuration from file.

    Args:
        config_path: Path to a JSON config file.

    Returns:
        ValidationConfig instance (defaults if the file does not exist).

    Raises:
        ConfigError: If config file exists but cannot be parsed.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        return ValidationConfig()

    try:
        with open(config_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object")
    return ValidationConfig.from_dict(data)


def save_config(config: ValidationConfig, config_path: Path | str) -> None:
    """Save configuration to file.

    Raises:
        ConfigError: If config cannot be saved.
    """
    try:
        with open(config_path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
    except OSError as e:
        raise ConfigError(f"Cannot write config file: {e}") from e
