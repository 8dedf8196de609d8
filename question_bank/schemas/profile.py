"""Profile API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    department: str | None = None
    role: str | None = None
    updated_at: datetime | None = None


class ProfileUpdateRequest(BaseModel):
    """Request body for PUT /profile. Role is not accepted here."""

    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(default=None, max_length=200)
    department: str | None = Field(default=None, max_length=200)
