"""Dashboard summary for the signed-in user."""

from typing import Annotated

from fastapi import APIRouter, Depends

from question_bank.api.v1.dependencies import UserSession, get_dashboard_service
from question_bank.application.use_cases import DashboardService
from question_bank.schemas.dashboard import DashboardResponse
from question_bank.schemas.question import QuestionResponse

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    session: UserSession,
    dashboard: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardResponse:
    stats = await dashboard.stats(session)
    return DashboardResponse(
        available_questions=stats.available_questions,
        user_downloads=stats.user_downloads,
        recent_downloads=stats.recent_downloads,
        active_students=stats.active_students,
        is_admin=stats.is_admin,
        recent_questions=[QuestionResponse.from_result(q) for q in stats.recent_questions],
    )
