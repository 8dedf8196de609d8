"""DTOs for the dashboard summary."""

from dataclasses import dataclass, field

from question_bank.application.dtos.question import QuestionResult


@dataclass(frozen=True)
class DashboardStats:
    """Quick stats for the signed-in user plus the newest questions."""

    available_questions: int
    user_downloads: int
    recent_downloads: int
    active_students: int
    is_admin: bool
    recent_questions: list[QuestionResult] = field(default_factory=list)
