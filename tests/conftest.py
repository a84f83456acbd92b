"""Shared fixtures.

The suite never talks to a real Supabase project; see fake_supabase.py.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from eduportal.backend.repository import ContentRepository
from eduportal.config.app_config import AppConfig, clear_config_cache
from eduportal.web.api import create_app
from eduportal.web.context import get_backend_client
from fake_supabase import FakeSupabase, seed_content


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Run every test outside the project root with a clean config cache."""
    monkeypatch.chdir(tmp_path)
    for var in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "APP_ENV", "PROTECT_SITE"):
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def backend() -> FakeSupabase:
    """Seeded in-memory backend."""
    fake = FakeSupabase()
    seed_content(fake)
    return fake


@pytest.fixture
def repo(backend) -> ContentRepository:
    return ContentRepository(backend)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def app(backend, app_config) -> FastAPI:
    """App wired to the fake backend."""
    app = create_app(app_config)
    app.dependency_overrides[get_backend_client] = lambda: backend
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Test client for the app. Redirects are not followed."""
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def login_as(client, app_config):
    """Put an access/refresh token pair in the client's cookie jar."""

    def _login(token: str) -> TestClient:
        client.cookies.set(app_config.session.access_cookie, token)
        client.cookies.set(app_config.session.refresh_cookie, f"refresh-{token}")
        return client

    return _login


@pytest.fixture
def record_progress(backend):
    """Add a progress row for a user."""

    def _record(user_id, question_id, status, updated_at="2026-01-01T00:00:00+00:00"):
        backend.add_row(
            "user_question_progress",
            {
                "user_id": user_id,
                "question_id": question_id,
                "status": status,
                "updated_at": updated_at,
            },
        )

    return _record
