"""Pytest configuration and fixtures for question_bank.

Supabase (auth, tables, storage) is replaced by FakeSupabase (tests/fakes.py),
an httpx.MockTransport handler injected into the shared HTTP client, so every
upstream request can be asserted. Each test gets a fresh app and state.
"""

import os

# Settings are read on first get_settings(); set env before importing the app.
os.environ["SUPABASE_URL"] = "https://test.supabase.co"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "service-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("SUPABASE_JWT_SECRET", None)

import httpx  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from question_bank.core.config import get_settings  # noqa: E402
from question_bank.core.lifespan import init_app_state  # noqa: E402
from question_bank.main import create_app  # noqa: E402
from tests.fakes import FakeSupabase  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Fake Supabase with an admin (admin-token) and an ordinary user (user-token)."""
    fake = FakeSupabase()
    fake.add_user(
        "admin-token", "admin-1", "admin@example.com", role="admin", full_name="Ada Admin"
    )
    fake.add_user(
        "user-token", "user-1", "student@example.com", role="user", full_name="Sam Student"
    )
    return fake


@pytest.fixture
async def app(fake_supabase: FakeSupabase):
    """Fresh app wired to FakeSupabase (lifespan state built directly)."""
    application = create_app()
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_supabase.handler))
    init_app_state(application, get_settings(), http_client)
    yield application
    await http_client.aclose()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def override_settings(monkeypatch: pytest.MonkeyPatch):
    """Set env vars and reload settings; restored after the test."""

    def apply(**env: str) -> None:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        get_settings.cache_clear()

    yield apply
    monkeypatch.undo()
    get_settings.cache_clear()
