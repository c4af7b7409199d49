"""Token encoding."""

import logging
from typing import Any, Callable, Mapping

from .algorithms import Algorithm
from .claims import ClaimSet
from .codec import base64url_encode, json_encode

logger = logging.getLogger(__name__)


def build_header(algorithm: Algorithm, headers: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return the JOSE header for ``algorithm``.

    ``alg`` and ``typ`` come first; caller fields are appended and can never
    replace them.
    """
    header: dict[str, Any] = {"alg": algorithm.name, "typ": "JWT"}
    for key, value in (headers or {}).items():
        header.setdefault(key, value)
    return header


def encode(
    claims: Mapping[str, Any],
    algorithm: Algorithm,
    headers: Mapping[str, Any] | None = None,
) -> str:
    """Sign a claim mapping as a compact JWT.

    Args:
        claims: Claims dict or :class:`ClaimSet` (will be JSON-encoded).
        algorithm: Algorithm and key used for the signature.
        headers: Extra header fields such as ``kid``.

    Returns:
        Compact JWT string (header.payload.signature).

    Raises:
        TypeError: If a claim or header value is not JSON-serializable.
    """
    header_b64 = base64url_encode(json_encode(build_header(algorithm, headers)))
    payload_b64 = base64url_encode(json_encode(claims))
    signing_input = f"{header_b64}.{payload_b64}"
    signature = algorithm.sign(signing_input.encode("ascii"))
    logger.debug("Encoded token with %s (%d claims)", algorithm.name, len(claims))
    return f"{signing_input}.{base64url_encode(signature)}"


def encode_with(
    algorithm: Algorithm,
    build: Callable[[ClaimSet], None],
    headers: Mapping[str, Any] | None = None,
) -> str:
    """Populate a fresh :class:`ClaimSet` with ``build`` and encode it.

    Example:
        >>> def build(claims):
        ...     claims.issuer = "fuller.li"
        >>> token = encode_with(Algorithm.hs256("secret"), build)
    """
    claims = ClaimSet()
    build(claims)
    return encode(claims, algorithm, headers)
