"""Application DTOs (dataclasses passed between use cases and repositories)."""

from question_bank.application.dtos.contact import ContactMessageCreate
from question_bank.application.dtos.dashboard import DashboardStats
from question_bank.application.dtos.download import (
    DownloadedQuestion,
    DownloadLogCreate,
    DownloadLogResult,
)
from question_bank.application.dtos.profile import ProfileResult, ProfileUpdate
from question_bank.application.dtos.question import (
    QuestionCreate,
    QuestionFilters,
    QuestionResult,
    ShareLink,
)
from question_bank.application.dtos.session import (
    AuthSession,
    AuthTokens,
    AuthUser,
    RegistrationResult,
)

__all__ = [
    "AuthSession",
    "AuthTokens",
    "AuthUser",
    "ContactMessageCreate",
    "DashboardStats",
    "DownloadLogCreate",
    "DownloadLogResult",
    "DownloadedQuestion",
    "ProfileResult",
    "ProfileUpdate",
    "QuestionCreate",
    "QuestionFilters",
    "QuestionResult",
    "RegistrationResult",
    "ShareLink",
]
