"""Session service: the single long-lived holder of resolved auth sessions.

Constructed once at startup (core.lifespan), stored on app.state and handed
to every consumer by reference. It turns bearer tokens into AuthSession
objects whose Role is resolved once, caches them per token, and publishes
auth-state changes to subscribers.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

from question_bank.application.dtos.profile import ProfileResult
from question_bank.application.dtos.session import (
    AuthSession,
    AuthTokens,
    AuthUser,
    RegistrationResult,
)
from question_bank.application.interfaces.repositories import IProfileRepository
from question_bank.application.interfaces.services import IAuthProvider
from question_bank.domain.enums import AuthEvent, Role
from question_bank.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, AuthSession | None], Awaitable[None] | None]

# Expired entries are swept once the cache grows past this many tokens.
_CACHE_SWEEP_SIZE = 1024


class Subscription:
    """Handle returned by SessionService.subscribe; call unsubscribe() to stop events."""

    def __init__(self, service: SessionService, listener: AuthListener) -> None:
        self._service = service
        self._listener = listener
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._service._remove_listener(self._listener)
            self.active = False


def _build_session(user: AuthUser, profile: ProfileResult | None) -> AuthSession:
    full_name = (profile.full_name if profile else "") or user.name
    return AuthSession(
        user_id=user.id,
        email=user.email,
        role=Role.resolve(True, profile.role if profile else None),
        full_name=full_name,
        department=profile.department if profile else None,
    )


class SessionService:
    """Resolve, cache and publish authenticated sessions."""

    def __init__(
        self,
        auth_provider: IAuthProvider,
        profile_repo: IProfileRepository,
        *,
        cache_ttl_seconds: int = 60,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._auth = auth_provider
        self._profiles = profile_repo
        self._ttl = timedelta(seconds=max(cache_ttl_seconds, 0))
        self._clock = clock
        self._cache: dict[str, tuple[AuthSession, datetime]] = {}
        self._listeners: list[AuthListener] = []

    # ---- Subscriptions ----

    def subscribe(self, listener: AuthListener) -> Subscription:
        """Register a listener for auth events. Sync and async callables are accepted."""
        self._listeners.append(listener)
        return Subscription(self, listener)

    def _remove_listener(self, listener: AuthListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    async def _emit(self, event: AuthEvent, session: AuthSession | None) -> None:
        for listener in list(self._listeners):
            try:
                result = listener(event, session)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Auth listener %r failed on %s", listener, event.value)

    # ---- Cache ----

    def _cache_get(self, token: str) -> AuthSession | None:
        entry = self._cache.get(token)
        if entry is None:
            return None
        session, expires_at = entry
        if expires_at <= self._clock():
            del self._cache[token]
            return None
        return session

    def _cache_put(self, token: str, session: AuthSession) -> None:
        now = self._clock()
        expires_at = now + self._ttl
        token_exp = self._auth.token_expires_at(token)
        if token_exp is not None and token_exp < expires_at:
            expires_at = token_exp
        if expires_at <= now:
            return
        if len(self._cache) >= _CACHE_SWEEP_SIZE:
            self._cache = {t: e for t, e in self._cache.items() if e[1] > now}
        self._cache[token] = (session, expires_at)

    def _evict_user(self, user_id: str) -> AuthSession | None:
        evicted = None
        for token, (session, _) in list(self._cache.items()):
            if session.user_id == user_id:
                evicted = session
                del self._cache[token]
        return evicted

    # ---- Sessions ----

    async def resolve(self, access_token: str | None) -> AuthSession:
        """Return the session for a bearer token; guest when there is no token.

        Raises AuthenticationException when the provider rejects the token.
        """
        if not access_token:
            return AuthSession.guest()
        cached = self._cache_get(access_token)
        if cached is not None:
            return cached
        user = await self._auth.get_user(access_token)
        session = _build_session(user, await self._profiles.get(user.id))
        self._cache_put(access_token, session)
        return session

    async def sign_in(self, email: str, password: str) -> tuple[AuthTokens, AuthSession]:
        user, tokens = await self._auth.sign_in(email, password)
        session = _build_session(user, await self._profiles.get(user.id))
        self._cache_put(tokens.access_token, session)
        logger.info("User signed in: %s", user.id)
        await self._emit(AuthEvent.SIGNED_IN, session)
        return tokens, session

    async def sign_up(self, email: str, password: str, full_name: str) -> RegistrationResult:
        """Create the auth user. The profile row is written by the caller."""
        user, tokens = await self._auth.sign_up(email, password, full_name)
        if tokens is not None:
            session = AuthSession(
                user_id=user.id, email=user.email, role=Role.USER, full_name=full_name
            )
            await self._emit(AuthEvent.SIGNED_IN, session)
        return RegistrationResult(user_id=user.id, email=user.email, tokens=tokens)

    async def refresh(self, refresh_token: str) -> tuple[AuthTokens, AuthSession]:
        user, tokens = await self._auth.refresh(refresh_token)
        session = _build_session(user, await self._profiles.get(user.id))
        self._cache_put(tokens.access_token, session)
        await self._emit(AuthEvent.TOKEN_REFRESHED, session)
        return tokens, session

    async def sign_out(self, access_token: str, session: AuthSession | None = None) -> None:
        await self._auth.sign_out(access_token)
        cached = self._cache.pop(access_token, None)
        if session is None and cached is not None:
            session = cached[0]
        if session is not None and session.user_id:
            self._evict_user(session.user_id)
        await self._emit(AuthEvent.SIGNED_OUT, session)

    async def send_password_reset(self, email: str, redirect_to: str | None) -> None:
        await self._auth.send_password_reset(email, redirect_to)

    async def profile_changed(self, user_id: str) -> None:
        """Drop cached sessions for user_id so the next resolve re-reads the profile."""
        evicted = self._evict_user(user_id)
        await self._emit(AuthEvent.USER_UPDATED, evicted)
