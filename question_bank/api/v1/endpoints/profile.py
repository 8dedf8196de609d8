"""Profile of the signed-in user (settings page)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from question_bank.api.v1.dependencies import UserSession, get_profile_service
from question_bank.application.dtos.profile import ProfileUpdate
from question_bank.application.use_cases import ProfileService
from question_bank.core.limiter import limit_writes
from question_bank.schemas.profile import ProfileResponse, ProfileUpdateRequest

router = APIRouter()

Profiles = Annotated[ProfileService, Depends(get_profile_service)]


@router.get("", response_model=ProfileResponse)
async def get_profile(session: UserSession, profiles: Profiles) -> ProfileResponse:
    """Return the profile, creating it on first access."""
    return ProfileResponse.model_validate(await profiles.get_or_create(session))


@router.put("", response_model=ProfileResponse)
@limit_writes
async def update_profile(
    request: Request,
    body: ProfileUpdateRequest,
    session: UserSession,
    profiles: Profiles,
) -> ProfileResponse:
    updated = await profiles.update(
        session,
        ProfileUpdate(full_name=body.full_name, department=body.department),
    )
    return ProfileResponse.model_validate(updated)
