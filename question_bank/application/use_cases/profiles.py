"""Profile operations for the signed-in user (read with lazy create, settings update)."""

from __future__ import annotations

import logging

from question_bank.application.dtos.profile import ProfileResult, ProfileUpdate
from question_bank.application.dtos.session import AuthSession
from question_bank.application.interfaces.repositories import IProfileRepository
from question_bank.application.services.session_service import SessionService
from question_bank.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(
        self, profile_repo: IProfileRepository, session_service: SessionService
    ) -> None:
        self.profile_repo = profile_repo
        self.sessions = session_service

    async def get_or_create(self, session: AuthSession) -> ProfileResult:
        """Return the caller's profile, inserting a bare one on first access."""
        user_id = session.user_id or ""
        profile = await self.profile_repo.get(user_id)
        if profile is not None:
            return profile
        logger.info("Creating missing profile for %s", user_id)
        return await self.profile_repo.create(user_id, session.full_name or "")

    async def update(self, session: AuthSession, changes: ProfileUpdate) -> ProfileResult:
        """Apply settings changes; cached sessions for the user are refreshed."""
        if changes.full_name is None and changes.department is None:
            raise ValidationException("At least one of full_name or department is required")
        user_id = session.user_id or ""
        updated = await self.profile_repo.update(user_id, changes)
        if updated is None:
            raise ResourceNotFoundException("profile", user_id)
        await self.sessions.profile_changed(user_id)
        return updated
