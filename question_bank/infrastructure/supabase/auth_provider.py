"""Supabase GoTrue adapter (implements IAuthProvider).

Translates GoTrue payloads into AuthUser/AuthTokens and provider rejections
(4xx) into domain exceptions. Provider outages (5xx, transport errors) are
left as SupabaseError so they surface as 502.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from question_bank.application.dtos.session import AuthTokens, AuthUser
from question_bank.domain.exceptions import (
    AuthenticationException,
    ValidationException,
)
from question_bank.infrastructure.exceptions import SupabaseError
from question_bank.infrastructure.security.jwt import token_expiry, verify_token
from question_bank.infrastructure.supabase._rest_client import AuthAPI

logger = logging.getLogger(__name__)


def _is_rejection(e: SupabaseError) -> bool:
    return e.status_code is not None and 400 <= e.status_code < 500


def _to_user(payload: dict[str, Any]) -> AuthUser:
    meta = payload.get("user_metadata") or {}
    return AuthUser(
        id=str(payload.get("id") or payload.get("sub") or ""),
        email=payload.get("email") or "",
        name=meta.get("full_name") or meta.get("name") or "",
    )


def _to_tokens(payload: dict[str, Any]) -> AuthTokens | None:
    access = payload.get("access_token")
    if not access:
        return None
    return AuthTokens(
        access_token=access,
        refresh_token=payload.get("refresh_token") or "",
        expires_in=int(payload.get("expires_in") or 0),
        token_type=(payload.get("token_type") or "bearer").lower(),
    )


def _session_parts(payload: dict[str, Any]) -> tuple[AuthUser, AuthTokens]:
    tokens = _to_tokens(payload)
    user = payload.get("user")
    if tokens is None or not isinstance(user, dict):
        raise SupabaseError("Auth provider returned no session")
    return _to_user(user), tokens


class SupabaseAuthProvider:
    """IAuthProvider backed by Supabase hosted auth."""

    def __init__(self, auth: AuthAPI, *, jwt_secret: str | None = None) -> None:
        self._auth = auth
        self._jwt_secret = jwt_secret

    async def sign_up(
        self, email: str, password: str, full_name: str
    ) -> tuple[AuthUser, AuthTokens | None]:
        try:
            payload = await self._auth.sign_up(
                email, password, data={"full_name": full_name}
            )
        except SupabaseError as e:
            if _is_rejection(e):
                raise ValidationException(e.message, field="email") from e
            raise
        # With email confirmation enabled the provider returns the bare user.
        user = payload.get("user") if isinstance(payload.get("user"), dict) else payload
        return _to_user(user), _to_tokens(payload)

    async def sign_in(self, email: str, password: str) -> tuple[AuthUser, AuthTokens]:
        try:
            payload = await self._auth.sign_in_with_password(email, password)
        except SupabaseError as e:
            if _is_rejection(e):
                raise AuthenticationException("Invalid email or password") from e
            raise
        return _session_parts(payload)

    async def refresh(self, refresh_token: str) -> tuple[AuthUser, AuthTokens]:
        try:
            payload = await self._auth.refresh_session(refresh_token)
        except SupabaseError as e:
            if _is_rejection(e):
                raise AuthenticationException("Invalid or expired refresh token") from e
            raise
        return _session_parts(payload)

    async def get_user(self, access_token: str) -> AuthUser:
        """Identify the token's user; verified locally when a JWT secret is configured."""
        if self._jwt_secret:
            try:
                claims = verify_token(access_token, self._jwt_secret)
            except ValueError as e:
                raise AuthenticationException("Invalid or expired session") from e
            return _to_user(claims)
        try:
            payload = await self._auth.get_user(access_token)
        except SupabaseError as e:
            if _is_rejection(e):
                raise AuthenticationException("Invalid or expired session") from e
            raise
        return _to_user(payload)

    async def sign_out(self, access_token: str) -> None:
        try:
            await self._auth.sign_out(access_token)
        except SupabaseError as e:
            if not _is_rejection(e):
                raise
            # Already expired or revoked upstream; the caller is signed out either way.
            logger.debug("Sign-out rejected by provider: %s", e.message)

    async def send_password_reset(self, email: str, redirect_to: str | None) -> None:
        await self._auth.reset_password_for_email(email, redirect_to)

    def token_expires_at(self, access_token: str) -> datetime | None:
        return token_expiry(access_token)
