"""JWT bearer authentication for Flask applications."""

import functools
import logging
import secrets

from flask import Flask, current_app, g, jsonify, request

from .config import DEFAULT_ALGORITHMS, ValidationConfig
from .decoder import decode
from .errors import InvalidTokenError

logger = logging.getLogger(__name__)


def init_app(app: Flask) -> None:
    """Fill in the JWT settings a Flask app needs for :func:`require_token`.

    Config keys:
        JWT_SECRET      - HMAC key for verifying tokens.
                          If unset a random secret is used (tokens won't survive restart).
        JWT_ALGORITHMS  - Accepted algorithm names (default ``["HS256"]``).
        JWT_LEEWAY      - Clock-skew tolerance in seconds (default 0).
        JWT_ISSUER      - Required ``iss`` claim, or None.
        JWT_AUDIENCE    - Required ``aud`` member, or None.
    """
    if not app.config.get("JWT_SECRET"):
        app.config["JWT_SECRET"] = secrets.token_hex(32)
        logger.warning(
            "JWT_SECRET is not set - using a random secret. "
            "Tokens will not survive restarts. "
            "Set JWT_SECRET in the app config for production use."
        )
    app.config.setdefault("JWT_ALGORITHMS", list(DEFAULT_ALGORITHMS))
    app.config.setdefault("JWT_LEEWAY", 0)
    app.config.setdefault("JWT_ISSUER", None)
    app.config.setdefault("JWT_AUDIENCE", None)


def _config_from_app() -> ValidationConfig:
    return ValidationConfig.from_dict({
        "algorithms": current_app.config.get("JWT_ALGORITHMS", DEFAULT_ALGORITHMS),
        "leeway": current_app.config.get("JWT_LEEWAY", 0),
        "issuer": current_app.config.get("JWT_ISSUER"),
        "audience": current_app.config.get("JWT_AUDIENCE"),
    })


def require_token(f):
    """Decorator that enforces JWT Bearer authentication.

    On success, sets ``g.claims`` to the decoded JWT payload.
    On failure, returns 401 JSON.
    """
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith("Bearer "):
            return jsonify({"error": "Authorization header required"}), 401

        token = auth_header[len("Bearer "):].strip()
        config = _config_from_app()
        algorithms = config.algorithms_for(current_app.config["JWT_SECRET"])

        try:
            g.claims = decode(token, algorithms, **config.decode_kwargs())
        except InvalidTokenError as e:
            logger.info("Rejected bearer token on %s: %s", request.path, type(e).__name__)
            return jsonify({"error": "Invalid or expired token"}), 401

        return f(*args, **kwargs)

    return wrapper
