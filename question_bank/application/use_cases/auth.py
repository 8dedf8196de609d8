"""Registration: provider sign-up followed by the profile upsert."""

from __future__ import annotations

from question_bank.application.dtos.session import RegistrationResult
from question_bank.application.interfaces.repositories import IProfileRepository
from question_bank.application.services.session_service import SessionService
from question_bank.domain.enums import Role


class RegistrationService:
    def __init__(
        self, session_service: SessionService, profile_repo: IProfileRepository
    ) -> None:
        self.sessions = session_service
        self.profile_repo = profile_repo

    async def register(self, full_name: str, email: str, password: str) -> RegistrationResult:
        """Create the auth user, then upsert its profile with the ordinary role.

        The upsert keys on the user id, so retrying a registration whose
        profile write failed is safe.
        """
        result = await self.sessions.sign_up(email, password, full_name)
        await self.profile_repo.upsert(result.user_id, full_name, Role.USER.value)
        return result
