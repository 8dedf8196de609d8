"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from question_bank.application.dtos.contact import ContactMessageCreate
    from question_bank.application.dtos.download import (
        DownloadLogCreate,
        DownloadLogResult,
    )
    from question_bank.application.dtos.profile import ProfileResult, ProfileUpdate
    from question_bank.application.dtos.question import (
        QuestionCreate,
        QuestionFilters,
        QuestionResult,
    )


class IQuestionRepository(Protocol):
    """Protocol for the past question catalog."""

    async def search(self, filters: QuestionFilters) -> list[QuestionResult]:
        """Return records matching filters, newest first."""

    async def get_by_id(self, question_id: str) -> QuestionResult | None:
        """Return record by ID."""

    async def list_recent(self, limit: int) -> list[QuestionResult]:
        """Return the newest records."""

    async def list_departments(self) -> list[str]:
        """Return distinct non-empty departments, alphabetical."""

    async def count(self) -> int:
        """Return total number of records."""

    async def create(self, data: QuestionCreate) -> QuestionResult:
        """Insert a record and return it as stored."""

    async def delete(self, question_id: str) -> QuestionResult | None:
        """Delete by ID; return the deleted record or None if missing."""


class IDownloadLogRepository(Protocol):
    """Protocol for per-user download logs (append-only)."""

    async def create(self, data: DownloadLogCreate) -> DownloadLogResult:
        """Insert one log entry."""

    async def list_for_user(self, user_id: str) -> list[DownloadLogResult]:
        """Return a user's history, newest first, with the question embedded."""

    async def count_for_user(self, user_id: str, since: datetime | None = None) -> int:
        """Count a user's downloads, optionally only those at or after since."""


class IProfileRepository(Protocol):
    """Protocol for user profiles."""

    async def get(self, user_id: str) -> ProfileResult | None:
        """Return profile by auth subject ID."""

    async def upsert(self, user_id: str, full_name: str, role: str) -> ProfileResult:
        """Create or merge the profile row keyed by user_id (safe to retry)."""

    async def create(self, user_id: str, full_name: str) -> ProfileResult:
        """Insert a bare profile (no role) for a user that has none."""

    async def update(self, user_id: str, changes: ProfileUpdate) -> ProfileResult | None:
        """Apply settings changes and stamp updated_at; None if missing."""

    async def count(self) -> int:
        """Return number of profiles (registered students)."""


class IContactRepository(Protocol):
    """Protocol for contact form messages."""

    async def create(self, data: ContactMessageCreate) -> None:
        """Store a message."""
