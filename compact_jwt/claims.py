"""Claim sets: registered-claim accessors and validation rules."""

import logging
import math
import time
from collections.abc import MutableMapping
from datetime import datetime, timedelta, timezone
from typing import Any, Iterator, Mapping

from .errors import (
    DecodeError,
    ExpiredSignatureError,
    ImmatureSignatureError,
    InvalidAudienceError,
    InvalidIssuedAtError,
    InvalidIssuerError,
)

logger = logging.getLogger(__name__)

_TIME_CLAIM_ERRORS = {
    "exp": "Expiration claim (exp) must be an integer",
    "nbf": "Not before claim (nbf) must be an integer",
    "iat": "Issued at claim (iat) must be an integer",
}

DEFAULT_OPTIONS = {
    "verify_exp": True,
    "verify_nbf": True,
    "verify_iat": True,
    "verify_iss": True,
    "verify_aud": True,
}


def merge_options(options: Mapping[str, bool] | None) -> dict[str, bool]:
    """Overlay caller options on :data:`DEFAULT_OPTIONS`.

    Raises:
        ValueError: If an option name is not recognised.
    """
    merged = dict(DEFAULT_OPTIONS)
    if options:
        unknown = set(options).difference(DEFAULT_OPTIONS)
        if unknown:
            raise ValueError(f"Unsupported options: {', '.join(sorted(unknown))}")
        merged.update({k: bool(v) for k, v in options.items()})
    return merged


def _seconds(value: int | float | timedelta) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def _to_epoch(value: datetime | int | float) -> int | float:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.timestamp()
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a datetime or epoch seconds, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class ClaimSet(MutableMapping):
    """Mutable mapping of claim name to JSON value.

    Also acts as the builder for :func:`compact_jwt.encode_with`: registered
    claims have typed properties, anything else is set by item assignment.

    Example:
        >>> claims = ClaimSet()
        >>> claims.issuer = "fuller.li"
        >>> claims["user"] = "kyle"
        >>> dict(claims)
        {'iss': 'fuller.li', 'user': 'kyle'}
    """

    def __init__(self, claims: Mapping[str, Any] | None = None, **kwargs: Any):
        self._claims: dict[str, Any] = {}
        if claims is not None:
            self._claims.update(claims)
        self._claims.update(kwargs)

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self._claims[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._claims[key] = value

    def __delitem__(self, key: str) -> None:
        del self._claims[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __repr__(self) -> str:
        return f"ClaimSet({self._claims!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the claims as a plain dict."""
        return dict(self._claims)

    # ------------------------------------------------------------------
    # Registered claims
    # ------------------------------------------------------------------

    @property
    def issuer(self) -> str | None:
        return self._claims.get("iss")

    @issuer.setter
    def issuer(self, value: str | None) -> None:
        self._set_or_clear("iss", value)

    @property
    def audience(self) -> str | list[str] | None:
        return self._claims.get("aud")

    @audience.setter
    def audience(self, value: str | list[str] | None) -> None:
        self._set_or_clear("aud", value)

    @property
    def expiration(self) -> datetime | None:
        return self._get_time("exp")

    @expiration.setter
    def expiration(self, value: datetime | int | float | None) -> None:
        self._set_time("exp", value)

    @property
    def not_before(self) -> datetime | None:
        return self._get_time("nbf")

    @not_before.setter
    def not_before(self, value: datetime | int | float | None) -> None:
        self._set_time("nbf", value)

    @property
    def issued_at(self) -> datetime | None:
        return self._get_time("iat")

    @issued_at.setter
    def issued_at(self, value: datetime | int | float | None) -> None:
        self._set_time("iat", value)

    def _set_or_clear(self, key: str, value: Any) -> None:
        if value is None:
            self._claims.pop(key, None)
        else:
            self._claims[key] = value

    def _set_time(self, key: str, value: datetime | int | float | None) -> None:
        self._set_or_clear(key, None if value is None else _to_epoch(value))

    def _get_time(self, key: str) -> datetime | None:
        timestamp = self.timestamp(key)
        if timestamp is None:
            return None
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)

    def timestamp(self, key: str) -> int | float | None:
        """Read a time claim as epoch seconds.

        Numbers and strings of ASCII digits are both accepted; the stored
        value is left untouched.

        Raises:
            DecodeError: If the claim holds anything else.
        """
        if key not in self._claims:
            return None
        value = self._claims[key]
        message = _TIME_CLAIM_ERRORS.get(key, f"Time claim ({key}) must be an integer")

        if isinstance(value, bool):
            raise DecodeError(message)
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if not math.isfinite(value):
                raise DecodeError(message)
            return value
        if isinstance(value, str) and value.isascii() and value.isdigit():
            try:
                return int(value)
            except ValueError:
                raise DecodeError(message) from None
        raise DecodeError(message)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_expiry(self, leeway: int | float | timedelta = 0, now: float | None = None) -> None:
        """Raise :class:`ExpiredSignatureError` if ``exp + leeway < now``."""
        exp = self.timestamp("exp")
        if exp is None:
            return
        now = time.time() if now is None else now
        if exp < now - _seconds(leeway):
            logger.debug("Token expired at %s (now %s)", exp, now)
            raise ExpiredSignatureError()

    def validate_not_before(self, leeway: int | float | timedelta = 0, now: float | None = None) -> None:
        """Raise :class:`ImmatureSignatureError` if ``nbf - leeway > now``."""
        nbf = self.timestamp("nbf")
        if nbf is None:
            return
        now = time.time() if now is None else now
        if nbf > now + _seconds(leeway):
            logger.debug("Token not valid before %s (now %s)", nbf, now)
            raise ImmatureSignatureError()

    def validate_issued_at(self, leeway: int | float | timedelta = 0, now: float | None = None) -> None:
        """Raise :class:`InvalidIssuedAtError` if ``iat - leeway > now``."""
        iat = self.timestamp("iat")
        if iat is None:
            return
        now = time.time() if now is None else now
        if iat > now + _seconds(leeway):
            logger.debug("Token issued in the future at %s (now %s)", iat, now)
            raise InvalidIssuedAtError()

    def validate_issuer(self, issuer: str) -> None:
        """Raise :class:`InvalidIssuerError` unless ``iss`` equals ``issuer``."""
        if "iss" not in self._claims:
            raise InvalidIssuerError("Token is missing the iss claim")
        if self._claims["iss"] != issuer:
            logger.debug("Issuer mismatch: expected %r", issuer)
            raise InvalidIssuerError()

    def validate_audience(self, audience: str) -> None:
        """Raise :class:`InvalidAudienceError` unless ``audience`` is named by ``aud``.

        ``aud`` may be a single string (compared for equality) or a list of
        strings (checked for membership).
        """
        if "aud" not in self._claims:
            raise InvalidAudienceError("Token is missing the aud claim")
        aud = self._claims["aud"]
        if isinstance(aud, str):
            matched = aud == audience
        elif isinstance(aud, list):
            matched = audience in aud
        else:
            matched = False
        if not matched:
            logger.debug("Audience mismatch: expected %r", audience)
            raise InvalidAudienceError()

    def validate(
        self,
        issuer: str | None = None,
        audience: str | None = None,
        leeway: int | float | timedelta = 0,
        now: float | None = None,
        options: Mapping[str, bool] | None = None,
    ) -> None:
        """Run every applicable claim check against a single instant.

        Args:
            issuer: Expected ``iss``; skipped when None.
            audience: Expected member of ``aud``; skipped when None.
            leeway: Clock-skew tolerance applied to exp/nbf/iat.
            now: Evaluation instant in epoch seconds (default: current time).
            options: ``verify_*`` switches, see :data:`DEFAULT_OPTIONS`.

        Raises:
            DecodeError: If a time claim is malformed.
            InvalidTokenError: The subclass naming the failed check.
        """
        opts = merge_options(options)
        now = time.time() if now is None else now

        if opts["verify_exp"]:
            self.validate_expiry(leeway, now)
        if opts["verify_nbf"]:
            self.validate_not_before(leeway, now)
        if opts["verify_iat"]:
            self.validate_issued_at(leeway, now)
        if issuer is not None and opts["verify_iss"]:
            self.validate_issuer(issuer)
        if audience is not None and opts["verify_aud"]:
            self.validate_audience(audience)
