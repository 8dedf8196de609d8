"""Dashboard summary for the signed-in user."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta

from question_bank.application.dtos.dashboard import DashboardStats
from question_bank.application.dtos.session import AuthSession
from question_bank.application.interfaces.repositories import (
    IDownloadLogRepository,
    IProfileRepository,
    IQuestionRepository,
)
from question_bank.application.use_cases.questions import RECENT_LIMIT
from question_bank.shared.utils.datetime import utc_now

RECENT_DOWNLOADS_WINDOW = timedelta(days=7)


class DashboardService:
    def __init__(
        self,
        question_repo: IQuestionRepository,
        download_repo: IDownloadLogRepository,
        profile_repo: IProfileRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.question_repo = question_repo
        self.download_repo = download_repo
        self.profile_repo = profile_repo
        self._clock = clock

    async def stats(self, session: AuthSession) -> DashboardStats:
        """Counts run concurrently; they are independent reads."""
        user_id = session.user_id or ""
        since = self._clock() - RECENT_DOWNLOADS_WINDOW
        available, total, recent, students, newest = await asyncio.gather(
            self.question_repo.count(),
            self.download_repo.count_for_user(user_id),
            self.download_repo.count_for_user(user_id, since=since),
            self.profile_repo.count(),
            self.question_repo.list_recent(RECENT_LIMIT),
        )
        return DashboardStats(
            available_questions=available,
            user_downloads=total,
            recent_downloads=recent,
            active_students=students,
            is_admin=session.is_admin,
            recent_questions=newest,
        )
