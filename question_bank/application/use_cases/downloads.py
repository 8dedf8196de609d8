"""Download log operations: record a completed download, read history."""

from __future__ import annotations

from question_bank.application.dtos.download import DownloadLogCreate, DownloadLogResult
from question_bank.application.dtos.session import AuthSession
from question_bank.application.interfaces.repositories import (
    IDownloadLogRepository,
    IQuestionRepository,
)
from question_bank.domain.exceptions import (
    AuthenticationException,
    ResourceNotFoundException,
    ValidationException,
)


class DownloadService:
    def __init__(
        self,
        download_repo: IDownloadLogRepository,
        question_repo: IQuestionRepository,
    ) -> None:
        self.download_repo = download_repo
        self.question_repo = question_repo

    async def record(
        self,
        session: AuthSession,
        *,
        question_id: str | None = None,
        file_path: str | None = None,
    ) -> DownloadLogResult:
        """Log one download for the caller.

        When question_id is given, the stored file path of that record is used.
        Raises AuthenticationException for guests.
        """
        if not session.is_authenticated or not session.user_id:
            raise AuthenticationException("Please log in to download")
        if question_id:
            question = await self.question_repo.get_by_id(question_id)
            if question is None:
                raise ResourceNotFoundException("past_question", question_id)
            file_path = question.file_path
        if not file_path:
            raise ValidationException("question_id or file_path is required")
        return await self.download_repo.create(
            DownloadLogCreate(
                user_id=session.user_id, file_path=file_path, question_id=question_id
            )
        )

    async def history(self, user_id: str) -> list[DownloadLogResult]:
        return await self.download_repo.list_for_user(user_id)
