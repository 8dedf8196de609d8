"""Supabase client construction.

One SupabaseRESTClient is built at app startup (see core.lifespan) around the
shared httpx.AsyncClient and kept on app.state; every request reuses it.
"""

import logging

import httpx

from question_bank.core.config import Settings
from question_bank.infrastructure.supabase._rest_client import SupabaseRESTClient

logger = logging.getLogger(__name__)


def create_supabase_client(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> SupabaseRESTClient:
    """Build the REST client from settings.

    Args:
        settings: Loaded settings (URL and keys already validated).
        http_client: Shared client to reuse; when None the REST client owns one.

    Returns:
        SupabaseRESTClient bound to settings.supabase_url.
    """
    client = SupabaseRESTClient(
        settings.supabase_url,
        settings.supabase_service_role_key.get_secret_value(),
        auth_key=settings.auth_api_key,
        http_client=http_client,
        timeout=settings.upstream_timeout_seconds,
    )
    logger.info("Supabase client configured for %s", settings.supabase_url)
    return client
