"""Liveness and readiness endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from question_bank.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()

_READY_DEPENDENCIES = ("supabase", "session_service")


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Backend not wired", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 once the Supabase client and session service exist; 503 before."""
    state = request.app.state
    checks = {name: getattr(state, name, None) is not None for name in _READY_DEPENDENCIES}
    missing = [name for name, ok in checks.items() if not ok]
    if missing:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(
                checks=checks,
                message=f"Supabase backend is not configured: {', '.join(missing)} missing",
            ).model_dump(),
        )
    return ReadinessResponse(checks=checks)
