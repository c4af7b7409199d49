"""Signing algorithms: ``none`` and the HMAC-SHA2 family."""

import hashlib
import hmac
from dataclasses import dataclass, field
from enum import Enum


class HashVariant(Enum):
    """Hash functions available to the HMAC algorithms."""

    SHA256 = "HS256"
    SHA384 = "HS384"
    SHA512 = "HS512"


_DIGESTS = {
    HashVariant.SHA256: hashlib.sha256,
    HashVariant.SHA384: hashlib.sha384,
    HashVariant.SHA512: hashlib.sha512,
}

NONE_NAME = "none"


@dataclass(frozen=True)
class Algorithm:
    """A signing algorithm together with its key.

    Instances come only from the constructors below, so the set of
    algorithms stays closed: ``none`` or HMAC over one of :class:`HashVariant`.

    Example:
        >>> algorithm = Algorithm.hs256("secret")
        >>> algorithm.name
        'HS256'
    """

    variant: HashVariant | None
    key: bytes = field(default=b"", repr=False)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def none(cls) -> "Algorithm":
        """The unsigned algorithm. Only an empty signature verifies."""
        return cls(variant=None)

    @classmethod
    def hmac(cls, variant: HashVariant, key: str | bytes) -> "Algorithm":
        """HMAC with the given hash. A ``str`` key is UTF-8 encoded."""
        if not isinstance(variant, HashVariant):
            raise TypeError(f"variant must be a HashVariant, got {variant!r}")
        if isinstance(key, str):
            key = key.encode("utf-8")
        return cls(variant=variant, key=bytes(key))

    @classmethod
    def hs256(cls, key: str | bytes) -> "Algorithm":
        return cls.hmac(HashVariant.SHA256, key)

    @classmethod
    def hs384(cls, key: str | bytes) -> "Algorithm":
        return cls.hmac(HashVariant.SHA384, key)

    @classmethod
    def hs512(cls, key: str | bytes) -> "Algorithm":
        return cls.hmac(HashVariant.SHA512, key)

    @classmethod
    def from_name(cls, name: str, key: str | bytes = b"") -> "Algorithm":
        """Build an algorithm from its header identifier.

        Raises:
            ValueError: If ``name`` is not a supported algorithm.
        """
        if name == NONE_NAME:
            return cls.none()
        try:
            variant = HashVariant(name)
        except ValueError:
            raise ValueError(f"Unsupported algorithm: {name}") from None
        return cls.hmac(variant, key)

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        """Identifier written to the ``alg`` header."""
        if self.variant is None:
            return NONE_NAME
        return self.variant.value

    def sign(self, signing_input: bytes) -> bytes:
        """Return the signature over ``signing_input``."""
        if self.variant is None:
            return b""
        return hmac.new(self.key, signing_input, _DIGESTS[self.variant]).digest()

    def verify(self, signing_input: bytes, signature: bytes) -> bool:
        """Check ``signature`` against a freshly computed one in constant time."""
        return hmac.compare_digest(self.sign(signing_input), signature)

    def __repr__(self) -> str:
        return f"Algorithm({self.name})"
