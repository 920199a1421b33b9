"""
tests/conftest.py -- Shared test fixtures for Campus Accounts.

This module provides:
  - test_settings: a Settings instance with a fixed secret and cheap bcrypt cost
  - store: an isolated in-memory UserStore for unit tests
  - api_client: TestClient wired to a named shared-memory store per test module

Design: Named shared-memory SQLite URIs (not plain :memory:) are required for
api_client because TestClient runs `def` route handlers in a thread pool.
Plain :memory: DBs are per-connection and would present a blank schema to each
worker thread. The named URI format (file:name?mode=memory&cache=shared&uri=true)
shares one in-memory instance across all connections in the same process.

The DEBUG env var must be set before any api import so get_settings() (called
at import time for the CORS origins) auto-generates a JWT_SECRET instead of
raising.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set DEBUG before any api/core import so get_settings() can
# auto-generate JWT_SECRET in dev mode instead of raising ValueError.
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.models import StudentRole, User
from auth.store import UserStore
from auth.tokens import hash_password, issue_token
from core.config import Settings

TEST_SECRET = "test-secret-key-that-is-at-least-32-characters-long"
TEST_PASSWORD = "correct horse battery staple"


def make_user(username: str | None = "alice", password: str = TEST_PASSWORD, **overrides) -> User:
    """Build an unsaved User with valid registration fields."""
    fields = {
        "username": username,
        "first_name": "Alice",
        "last_name": "Ng",
        "email": "alice@example.edu",
        "id_number": "2021-00042",
        "birthday": "2000-01-01",
        "role": StudentRole(program="BS Computer Science"),
        "password_hash": hash_password(password, rounds=4),
    }
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def test_secret() -> str:
    return TEST_SECRET


@pytest.fixture
def test_password() -> str:
    return TEST_PASSWORD


@pytest.fixture
def user_factory():
    """Return make_user so tests can build records without importing conftest."""
    return make_user


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        debug=False,
        jwt_secret=TEST_SECRET,
        database_url="sqlite:///:memory:",
        bcrypt_rounds=4,
    )


@pytest.fixture
def store() -> Generator[UserStore, None, None]:
    """Fresh single-threaded in-memory UserStore."""
    s = UserStore("sqlite:///:memory:")
    yield s
    s.close()


def _patch_lifespan(settings: Settings, user_store: UserStore):
    """Return an async context manager that replaces the real lifespan.

    Wires the test Settings and store into app.state so TestClient routes see
    an isolated database and a known signing secret.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.settings = settings
        app.state.user_store = user_store
        yield

    return test_lifespan


@pytest.fixture(scope="module")
def api_client(request) -> Generator[tuple[TestClient, str, UserStore], None, None]:
    """Yield (client, token, store) for API integration tests.

    A user "alice" (password TEST_PASSWORD) exists before the client starts
    and token is a valid bearer token for her.
    """
    suffix = request.module.__name__.rsplit(".", 1)[-1]
    db_url = f"sqlite:///file:test_accounts_{suffix}?mode=memory&cache=shared&uri=true"
    settings = Settings(_env_file=None, debug=False, jwt_secret=TEST_SECRET, database_url=db_url, bcrypt_rounds=4)
    user_store = UserStore(db_url)
    user_store.create_user(make_user("alice"))
    token = issue_token({"username": "alice"}, TEST_SECRET)

    app.router.lifespan_context = _patch_lifespan(settings, user_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, token, user_store

    user_store.close()
