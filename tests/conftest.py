"""
Shared fixtures: a fresh app (and stores) per test.
"""

import os

# config.settings builds its Settings at import time
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from auth.jwt import TokenSigner
from config.settings import Settings
from main import create_app


@pytest.fixture()
def settings() -> Settings:
    return Settings(jwt_secret="test-secret")


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def signer(settings) -> TokenSigner:
    return TokenSigner(settings.jwt_secret, settings.jwt_expiry_seconds)


@pytest.fixture()
def register(client):
    """Register a user and return ``(token, user)``."""

    def _register(email: str = "a@x.com", password: str = "secret1"):
        r = client.post("/auth/register", json={"email": email, "password": password})
        assert r.status_code == 201, r.text
        data = r.json()["data"]
        return data["token"], data["user"]

    return _register
