"""Custom exception classes for compact-jwt."""


class CompactJWTError(Exception):
    """Base exception class for compact-jwt errors."""

    pass


class ConfigError(CompactJWTError):
    """Configuration-related errors."""

    pass


class InvalidTokenError(CompactJWTError):
    """Base class for every reason a token is rejected.

    Catch this to treat any failure as "reject the token".
    """

    pass


class DecodeError(InvalidTokenError):
    """Raised when a token is not structurally well-formed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadTokenError(InvalidTokenError):
    """Raised when no candidate algorithm verifies the signature."""

    def __init__(self, message: str = "Signature verification failed"):
        super().__init__(message)


class ExpiredSignatureError(InvalidTokenError):
    """Raised when the token has an ``exp`` claim in the past."""

    def __init__(self, message: str = "Signature has expired"):
        super().__init__(message)


class ImmatureSignatureError(InvalidTokenError):
    """Raised when the token has an ``nbf`` claim in the future."""

    def __init__(self, message: str = "The token is not yet valid (nbf)"):
        super().__init__(message)


class InvalidIssuedAtError(InvalidTokenError):
    """Raised when the token has an ``iat`` claim in the future."""

    def __init__(self, message: str = "Issued at claim (iat) is in the future"):
        super().__init__(message)


class InvalidIssuerError(InvalidTokenError):
    """Raised when ``iss`` is missing or differs from the expected issuer."""

    def __init__(self, message: str = "Invalid issuer"):
        super().__init__(message)


class InvalidAudienceError(InvalidTokenError):
    """Raised when ``aud`` is missing or does not contain the expected audience."""

    def __init__(self, message: str = "Invalid audience"):
        super().__init__(message)
