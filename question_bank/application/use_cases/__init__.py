"""Use cases: one service per feature area."""

from question_bank.application.use_cases.auth import RegistrationService
from question_bank.application.use_cases.contact import ContactService
from question_bank.application.use_cases.dashboard import DashboardService
from question_bank.application.use_cases.downloads import DownloadService
from question_bank.application.use_cases.profiles import ProfileService
from question_bank.application.use_cases.questions import (
    QuestionAdminService,
    QuestionCatalogService,
    build_storage_path,
)

__all__ = [
    "ContactService",
    "DashboardService",
    "DownloadService",
    "ProfileService",
    "QuestionAdminService",
    "QuestionCatalogService",
    "RegistrationService",
    "build_storage_path",
]
