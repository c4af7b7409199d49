"""compact-jwt - HMAC-signed JSON Web Tokens for Python.

Encodes claims into compact ``header.payload.signature`` tokens and decodes,
verifies and validates them again.

Example:
    >>> from compact_jwt import Algorithm, encode, decode
    >>> algorithm = Algorithm.hs256("secret")
    >>> token = encode({"name": "Kyle"}, algorithm)
    >>> decode(token, algorithm)
    {'name': 'Kyle'}
"""

from .algorithms import Algorithm, HashVariant
from .claims import ClaimSet
from .codec import base64url_decode, base64url_encode
from .config import ValidationConfig, load_config, save_config
from .decoder import DecodedToken, decode, get_unverified_header, load
from .encoder import encode, encode_with
from .errors import (
    CompactJWTError,
    ConfigError,
    InvalidTokenError,
    DecodeError,
    BadTokenError,
    ExpiredSignatureError,
    ImmatureSignatureError,
    InvalidIssuedAtError,
    InvalidIssuerError,
    InvalidAudienceError,
)

__version__ = "1.0.0"
__all__ = [
    # Operations
    "encode",
    "encode_with",
    "decode",
    "load",
    "get_unverified_header",
    # Data classes
    "Algorithm",
    "HashVariant",
    "ClaimSet",
    "DecodedToken",
    "ValidationConfig",
    # Codec
    "base64url_encode",
    "base64url_decode",
    # Errors
    "CompactJWTError",
    "ConfigError",
    "InvalidTokenError",
    "DecodeError",
    "BadTokenError",
    "ExpiredSignatureError",
    "ImmatureSignatureError",
    "InvalidIssuedAtError",
    "InvalidIssuerError",
    "InvalidAudienceError",
    # Config utilities
    "load_config",
    "save_config",
]
