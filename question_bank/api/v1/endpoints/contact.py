"""Contact form endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from question_bank.api.v1.dependencies import get_contact_service
from question_bank.application.dtos.contact import ContactMessageCreate
from question_bank.application.use_cases import ContactService
from question_bank.core.limiter import limit_writes
from question_bank.schemas.auth import MessageResponse
from question_bank.schemas.contact import ContactRequest

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=201)
@limit_writes
async def submit_contact(
    request: Request,
    body: ContactRequest,
    contact: Annotated[ContactService, Depends(get_contact_service)],
) -> MessageResponse:
    await contact.submit(
        ContactMessageCreate(name=body.name, email=str(body.email), message=body.message)
    )
    return MessageResponse(message="Message sent")
