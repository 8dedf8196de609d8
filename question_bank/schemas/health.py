"""Bodies returned by the /health routes."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Process is up; nothing upstream is contacted."""

    status: str = Field(default="ok", description="Always 'ok' while the process serves")


class ReadinessResponse(BaseModel):
    """Supabase client and session service are attached to the app."""

    status: str = Field(default="ok", description="'ok' when every check passed")
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Per-dependency wiring state (supabase, session_service)",
    )


class ReadinessErrorResponse(ReadinessResponse):
    """503 body: at least one dependency is missing from app state."""

    status: str = Field(default="not_ready", description="'not_ready' on 503")
    message: str = Field(..., description="Which dependency is missing")
