"""
Shared fixtures: one app per test on a private in-memory SQLite database.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from account_service.core.config import build_settings
from account_service.database import build_engine
from account_service.main import create_app


@pytest.fixture
def settings():
    return build_settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        # plain http test client would never send a Secure cookie back
        SESSION_COOKIE_SECURE=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    engine = build_engine(settings.DATABASE_URL, poolclass=StaticPool)
    return create_app(settings=settings, engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def _register_payload(**overrides) -> dict:
    payload = {
        "email": "alice@example.com",
        "password": "s3cret-pass",
        "name": "Alice",
        "address": "1 Main St",
        "phone": "555-0100",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def register_payload():
    """Factory for a complete registration body; keyword args replace fields."""
    return _register_payload


@pytest.fixture
def login(client):
    """Register ``email`` and return a Bearer header for its session."""

    def _login(email: str) -> dict:
        res = client.post("/api/users/register", json=_register_payload(email=email))
        assert res.status_code == 201
        return {"Authorization": f"Bearer {res.cookies['token']}"}

    return _login
