"""Service interfaces (ports) for the application layer.

Protocols define contracts for external services (DIP).
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from question_bank.application.dtos.session import AuthTokens, AuthUser


class IAuthProvider(Protocol):
    """Protocol for the hosted auth provider.

    Implementations raise AuthenticationException when the provider rejects
    credentials or tokens, and ValidationException when it rejects sign-up input.
    """

    async def sign_up(
        self, email: str, password: str, full_name: str
    ) -> tuple[AuthUser, AuthTokens | None]:
        """Create a user; tokens are None when email confirmation is pending."""

    async def sign_in(self, email: str, password: str) -> tuple[AuthUser, AuthTokens]:
        """Exchange email and password for tokens."""

    async def refresh(self, refresh_token: str) -> tuple[AuthUser, AuthTokens]:
        """Exchange a refresh token for a new token pair."""

    async def get_user(self, access_token: str) -> AuthUser:
        """Return the user an access token belongs to."""

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""

    async def send_password_reset(self, email: str, redirect_to: str | None) -> None:
        """Email a password reset link."""

    def token_expires_at(self, access_token: str) -> datetime | None:
        """Return the token expiry, if it can be read."""
