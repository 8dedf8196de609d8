"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the Supabase-backed repositories, the storage
service, the shared SessionService and the application use cases. Routes
depend only on these, never on infrastructure directly.

Long-lived objects (Supabase client, SessionService) are created once in the
lifespan and read from app.state; the per-request objects built here are
cheap wrappers around them.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from question_bank.application.dtos.session import AuthSession
from question_bank.application.services.session_service import SessionService
from question_bank.application.use_cases import (
    ContactService,
    DashboardService,
    DownloadService,
    ProfileService,
    QuestionAdminService,
    QuestionCatalogService,
    RegistrationService,
)
from question_bank.core.config import Settings, get_settings
from question_bank.domain.enums import Role
from question_bank.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
)
from question_bank.infrastructure.external.storage import SupabaseStorageService
from question_bank.infrastructure.supabase import SupabaseRESTClient
from question_bank.infrastructure.supabase.repositories import (
    SupabaseContactRepository,
    SupabaseDownloadLogRepository,
    SupabaseProfileRepository,
    SupabaseQuestionRepository,
)

_http_bearer = HTTPBearer(auto_error=False)


# ---- Shared app state ----


def get_supabase(request: Request) -> SupabaseRESTClient:
    """Supabase REST client built at startup (app.state.supabase)."""
    return request.app.state.supabase


def get_session_service(request: Request) -> SessionService:
    """The single SessionService built at startup (app.state.session_service)."""
    return request.app.state.session_service


def build_storage_service(
    supabase: SupabaseRESTClient, settings: Settings
) -> SupabaseStorageService:
    """Storage service for the configured bucket. Also used by the storage proxies."""
    return SupabaseStorageService(
        supabase, settings.storage_bucket, upsert=settings.storage_upsert
    )


def get_storage_service(
    supabase: Annotated[SupabaseRESTClient, Depends(get_supabase)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SupabaseStorageService:
    return build_storage_service(supabase, settings)


# ---- Repositories ----


def get_question_repo(
    supabase: Annotated[SupabaseRESTClient, Depends(get_supabase)],
) -> SupabaseQuestionRepository:
    return SupabaseQuestionRepository(supabase)


def get_download_repo(
    supabase: Annotated[SupabaseRESTClient, Depends(get_supabase)],
) -> SupabaseDownloadLogRepository:
    return SupabaseDownloadLogRepository(supabase)


def get_profile_repo(
    supabase: Annotated[SupabaseRESTClient, Depends(get_supabase)],
) -> SupabaseProfileRepository:
    return SupabaseProfileRepository(supabase)


def get_contact_repo(
    supabase: Annotated[SupabaseRESTClient, Depends(get_supabase)],
) -> SupabaseContactRepository:
    return SupabaseContactRepository(supabase)


# ---- Use cases ----


def get_catalog_service(
    question_repo: Annotated[SupabaseQuestionRepository, Depends(get_question_repo)],
    storage: Annotated[SupabaseStorageService, Depends(get_storage_service)],
) -> QuestionCatalogService:
    return QuestionCatalogService(question_repo, storage)


def get_admin_service(
    question_repo: Annotated[SupabaseQuestionRepository, Depends(get_question_repo)],
    storage: Annotated[SupabaseStorageService, Depends(get_storage_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> QuestionAdminService:
    return QuestionAdminService(
        question_repo, storage, max_upload_size=settings.max_upload_size
    )


def get_download_service(
    download_repo: Annotated[SupabaseDownloadLogRepository, Depends(get_download_repo)],
    question_repo: Annotated[SupabaseQuestionRepository, Depends(get_question_repo)],
) -> DownloadService:
    return DownloadService(download_repo, question_repo)


def get_profile_service(
    profile_repo: Annotated[SupabaseProfileRepository, Depends(get_profile_repo)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> ProfileService:
    return ProfileService(profile_repo, sessions)


def get_dashboard_service(
    question_repo: Annotated[SupabaseQuestionRepository, Depends(get_question_repo)],
    download_repo: Annotated[SupabaseDownloadLogRepository, Depends(get_download_repo)],
    profile_repo: Annotated[SupabaseProfileRepository, Depends(get_profile_repo)],
) -> DashboardService:
    return DashboardService(question_repo, download_repo, profile_repo)


def get_contact_service(
    contact_repo: Annotated[SupabaseContactRepository, Depends(get_contact_repo)],
) -> ContactService:
    return ContactService(contact_repo)


def get_registration_service(
    sessions: Annotated[SessionService, Depends(get_session_service)],
    profile_repo: Annotated[SupabaseProfileRepository, Depends(get_profile_repo)],
) -> RegistrationService:
    return RegistrationService(sessions, profile_repo)


# ---- Sessions and roles ----


def get_access_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str | None:
    """Bearer token from the Authorization header, if any."""
    if not credentials or not credentials.credentials:
        return None
    return credentials.credentials


async def get_current_session(
    token: Annotated[str | None, Depends(get_access_token)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> AuthSession:
    """Resolved caller; guest without a token, 401 when the token is rejected."""
    return await sessions.resolve(token)


async def require_user(
    session: Annotated[AuthSession, Depends(get_current_session)],
) -> AuthSession:
    """Require a signed-in caller (401 otherwise)."""
    if not session.is_authenticated:
        raise AuthenticationException()
    return session


async def require_admin(
    session: Annotated[AuthSession, Depends(require_user)],
) -> AuthSession:
    """Require the admin role (403 otherwise)."""
    if not session.is_admin:
        raise AuthorizationException(required_role=Role.ADMIN.value)
    return session


CurrentSession = Annotated[AuthSession, Depends(get_current_session)]
UserSession = Annotated[AuthSession, Depends(require_user)]
AdminSession = Annotated[AuthSession, Depends(require_admin)]
