"""Token decoding, signature verification and claim validation."""

import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Iterable, Mapping

from .algorithms import Algorithm
from .claims import ClaimSet, merge_options
from .codec import base64url_decode, json_decode
from .errors import BadTokenError, DecodeError

logger = logging.getLogger(__name__)


@dataclass
class DecodedToken:
    """Holds the parsed parts of a JWT before any verification."""

    header: dict[str, Any]
    claims: dict[str, Any]
    signature: bytes
    signing_input: bytes


def load(token: str | bytes) -> DecodedToken:
    """Split and parse a token without verifying anything.

    The signing input is kept exactly as received; it is never rebuilt from
    the parsed JSON.

    Raises:
        DecodeError: If the token does not have three segments or a segment
            is not valid Base64URL/JSON.
    """
    if isinstance(token, bytes):
        try:
            token = token.decode("ascii")
        except UnicodeDecodeError:
            raise DecodeError("Token must be ASCII")
    elif not isinstance(token, str):
        raise DecodeError(f"Token must be a string, got {type(token).__name__}")

    parts = token.split(".")
    if len(parts) != 3:
        raise DecodeError("Not enough segments")

    header_b64, payload_b64, signature_b64 = parts
    header = json_decode(base64url_decode(header_b64))
    claims = json_decode(base64url_decode(payload_b64))
    signature = base64url_decode(signature_b64)

    return DecodedToken(
        header=header,
        claims=claims,
        signature=signature,
        signing_input=f"{header_b64}.{payload_b64}".encode("ascii"),
    )


def get_unverified_header(token: str) -> dict[str, Any]:
    """Return the header of ``token`` without verifying it."""
    return load(token).header


def _candidates(algorithms: Algorithm | Iterable[Algorithm]) -> list[Algorithm]:
    if isinstance(algorithms, Algorithm):
        return [algorithms]
    return list(algorithms)


def verify_signature(decoded: DecodedToken, algorithms: Algorithm | Iterable[Algorithm]) -> None:
    """Check the signature against every candidate naming the header's ``alg``.

    Raises:
        BadTokenError: If no candidate matches the declared algorithm and
            verifies the signature. Both cases give the same error.
    """
    declared = decoded.header.get("alg")
    for algorithm in _candidates(algorithms):
        if algorithm.name != declared:
            continue
        if algorithm.verify(decoded.signing_input, decoded.signature):
            return

    logger.debug("Signature rejected for declared alg %r", declared)
    raise BadTokenError()


def decode(
    token: str,
    algorithms: Algorithm | Iterable[Algorithm],
    *,
    verify: bool = True,
    leeway: int | float | timedelta = 0,
    issuer: str | None = None,
    audience: str | None = None,
    options: Mapping[str, bool] | None = None,
) -> dict[str, Any]:
    """Verify and decode a JWT.

    Args:
        token: Compact JWT string.
        algorithms: One :class:`Algorithm` or an iterable of candidates. The
            token's ``alg`` header must name one of them.
        verify: Check the signature. Claim checks run either way.
        leeway: Seconds of clock skew tolerated by exp/nbf/iat checks.
        issuer: Required value of ``iss``.
        audience: Value that ``aud`` must equal or contain.
        options: ``verify_exp``/``verify_nbf``/``verify_iat``/``verify_iss``/
            ``verify_aud`` switches (all default to True).

    Returns:
        Decoded payload dict, with claim values exactly as they were sent.

    Raises:
        DecodeError: If the token is malformed.
        BadTokenError: If the signature does not verify.
        ExpiredSignatureError: If ``exp`` is in the past.
        ImmatureSignatureError: If ``nbf`` is in the future.
        InvalidIssuedAtError: If ``iat`` is in the future.
        InvalidIssuerError: If ``iss`` does not match ``issuer``.
        InvalidAudienceError: If ``aud`` does not contain ``audience``.
    """
    opts = merge_options(options)
    decoded = load(token)

    if verify:
        verify_signature(decoded, algorithms)

    ClaimSet(decoded.claims).validate(
        issuer=issuer,
        audience=audience,
        leeway=leeway,
        now=time.time(),
        options=opts,
    )
    return decoded.claims
