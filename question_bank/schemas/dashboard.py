"""Dashboard API schemas."""

from pydantic import BaseModel

from question_bank.schemas.question import QuestionResponse


class DashboardResponse(BaseModel):
    available_questions: int
    user_downloads: int
    recent_downloads: int
    active_students: int
    is_admin: bool
    recent_questions: list[QuestionResponse]
