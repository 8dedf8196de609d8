"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (shared HTTP client, Supabase
client, session service).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from question_bank.application.dtos.session import AuthSession
from question_bank.application.services.session_service import SessionService
from question_bank.core.config import Settings, get_settings
from question_bank.domain.enums import AuthEvent
from question_bank.infrastructure.supabase.auth_provider import SupabaseAuthProvider
from question_bank.infrastructure.supabase.client import create_supabase_client
from question_bank.infrastructure.supabase.repositories import SupabaseProfileRepository
from question_bank.shared.logging import setup_logging

logger = logging.getLogger(__name__)


def log_auth_event(event: AuthEvent, session: AuthSession | None) -> None:
    """Session subscriber: one log line per auth-state change."""
    user_id = session.user_id if session else None
    role = session.role.value if session else None
    logger.info("Auth event %s (user=%s, role=%s)", event.value, user_id, role)


def init_app_state(
    app: FastAPI, settings: Settings, http_client: httpx.AsyncClient
) -> None:
    """Build the long-lived objects every request shares and put them on app.state.

    Called by the lifespan; tests call it directly with a client whose
    transport fakes Supabase.
    """
    app.state.http_client = http_client
    supabase = create_supabase_client(settings, http_client=http_client)
    app.state.supabase = supabase
    jwt_secret = (
        settings.supabase_jwt_secret.get_secret_value()
        if settings.supabase_jwt_secret
        else None
    )
    session_service = SessionService(
        SupabaseAuthProvider(supabase.auth, jwt_secret=jwt_secret or None),
        SupabaseProfileRepository(supabase),
        cache_ttl_seconds=settings.session_cache_ttl_seconds,
    )
    app.state.session_service = session_service
    app.state.auth_log_subscription = session_service.subscribe(log_auth_event)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, shared HTTP client (connection reuse for every
    outbound Supabase call), Supabase client, session service. Shutdown:
    session subscription removal, HTTP client close.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    http_client = httpx.AsyncClient(timeout=settings.upstream_timeout_seconds)
    init_app_state(app, settings, http_client)
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    subscription = getattr(app.state, "auth_log_subscription", None)
    if subscription is not None:
        subscription.unsubscribe()
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("Shared HTTP client closed")
