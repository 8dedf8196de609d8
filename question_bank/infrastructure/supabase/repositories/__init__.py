"""Supabase-backed repositories (implement application.interfaces.repositories)."""

from question_bank.infrastructure.supabase.repositories.contact_repo import (
    SupabaseContactRepository,
)
from question_bank.infrastructure.supabase.repositories.download_log_repo import (
    SupabaseDownloadLogRepository,
)
from question_bank.infrastructure.supabase.repositories.profile_repo import (
    SupabaseProfileRepository,
)
from question_bank.infrastructure.supabase.repositories.question_repo import (
    SupabaseQuestionRepository,
)

__all__ = [
    "SupabaseContactRepository",
    "SupabaseDownloadLogRepository",
    "SupabaseProfileRepository",
    "SupabaseQuestionRepository",
]
