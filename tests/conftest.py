"""Shared pytest fixtures for compact-jwt tests."""

import pytest
from flask import Flask, g, jsonify

from compact_jwt import Algorithm
from compact_jwt.middleware import init_app, require_token


@pytest.fixture
def secret():
    """The HMAC secret used by the reference token vectors."""
    return "secret"


@pytest.fixture
def hs256(secret):
    return Algorithm.hs256(secret)


@pytest.fixture
def app():
    """A Flask app with one protected route."""
    flask_app = Flask(__name__)
    flask_app.config["TESTING"] = True
    flask_app.config["JWT_SECRET"] = "test-jwt-secret"
    init_app(flask_app)

    @flask_app.get("/me")
    @require_token
    def me():
        return jsonify(g.claims)

    return flask_app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
