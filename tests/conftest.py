"""Shared fixtures for the Wellcheck tests.

Every test gets a fresh application bound to an in-memory SQLite
database with the default tip catalog already loaded.
"""
from __future__ import annotations

from datetime import datetime

import pytest

from wellcheck import create_app, db, init_db
from wellcheck.models import CheckinEntry

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
    "LOG_LEVEL": "WARNING",
}

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def app():
    app = create_app(dict(TEST_CONFIG))
    with app.app_context():
        init_db()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    """Register an account through the API and return its auth payload."""

    def _register(email="alice@example.com", password=DEFAULT_PASSWORD, name="Alice"):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]

    return _register


@pytest.fixture
def user(register):
    return register()


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {user['token']}"}


@pytest.fixture
def headers_for():
    def _headers(payload):
        return {"Authorization": f"Bearer {payload['token']}"}

    return _headers


@pytest.fixture
def make_checkin(app):
    """Insert a check-in directly so tests can control ``created_at``.

    Returns the new entry's id.
    """

    def _make(user_id, mood=3, stress=3, sleep=3, created_at: datetime | None = None, **extra):
        with app.app_context():
            entry = CheckinEntry(
                user_id=user_id,
                mood=mood,
                stress=stress,
                sleep=sleep,
                notes=extra.get("notes"),
                tags=extra.get("tags", []),
            )
            if created_at is not None:
                entry.created_at = created_at
            db.session.add(entry)
            db.session.commit()
            return entry.id

    return _make
