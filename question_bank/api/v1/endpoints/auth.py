"""Auth API: registration, login, refresh, logout, session, password reset.

Credentials are checked by the hosted auth provider; these routes only
relay them through the shared SessionService.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from question_bank.api.v1.dependencies import (
    CurrentSession,
    UserSession,
    get_access_token,
    get_registration_service,
    get_session_service,
)
from question_bank.application.dtos.session import AuthSession, AuthTokens
from question_bank.application.services.session_service import SessionService
from question_bank.application.use_cases import RegistrationService
from question_bank.core.config import Settings, get_settings
from question_bank.core.limiter import limit_auth
from question_bank.domain.exceptions import AuthenticationException
from question_bank.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    TokenResponse,
)

router = APIRouter()


def _tokens(tokens: AuthTokens) -> TokenResponse:
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=tokens.expires_in,
        token_type=tokens.token_type,
    )


def _session(session: AuthSession) -> SessionResponse:
    return SessionResponse(
        user_id=session.user_id,
        email=session.email,
        full_name=session.full_name,
        department=session.department,
        role=session.role,
        is_authenticated=session.is_authenticated,
        is_admin=session.is_admin,
    )


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limit_auth
async def register(
    request: Request,
    body: RegisterRequest,
    registration: Annotated[RegistrationService, Depends(get_registration_service)],
) -> RegisterResponse:
    """Sign up with the provider and create the profile (role 'user')."""
    result = await registration.register(body.name.strip(), body.email, body.password)
    return RegisterResponse(
        user_id=result.user_id,
        email=result.email,
        tokens=_tokens(result.tokens) if result.tokens else None,
    )


@router.post("/login", response_model=LoginResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> LoginResponse:
    """Exchange email and password for tokens. 401 when the provider rejects them."""
    tokens, session = await sessions.sign_in(body.email, body.password)
    return LoginResponse(tokens=_tokens(tokens), session=_session(session))


@router.post("/refresh", response_model=TokenResponse)
@limit_auth
async def refresh(
    request: Request,
    body: RefreshRequest,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> TokenResponse:
    tokens, _ = await sessions.refresh(body.refresh_token)
    return _tokens(tokens)


@router.post("/logout", status_code=204)
async def logout(
    session: UserSession,
    token: Annotated[str | None, Depends(get_access_token)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> Response:
    if not token:
        raise AuthenticationException()
    await sessions.sign_out(token, session)
    return Response(status_code=204)


@router.get("/session", response_model=SessionResponse)
async def current_session(session: CurrentSession) -> SessionResponse:
    """Return the caller's session; role is 'guest' without a token."""
    return _session(session)


@router.post("/password-reset", response_model=MessageResponse, status_code=202)
@limit_auth
async def password_reset(
    request: Request,
    session: UserSession,
    sessions: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    """Email a password reset link to the signed-in user's address."""
    await sessions.send_password_reset(
        session.email or "", settings.password_reset_redirect_url or None
    )
    return MessageResponse(message="Password reset email sent")
