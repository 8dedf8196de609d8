"""Admin console: upload papers (file + metadata), list and delete. Admin role only."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile

from question_bank.api.v1.dependencies import AdminSession, get_admin_service
from question_bank.application.use_cases import QuestionAdminService
from question_bank.core.limiter import limit_upload, limit_writes
from question_bank.domain.exceptions import PayloadTooLargeException, ValidationException
from question_bank.schemas.question import QuestionResponse

router = APIRouter()

Admin = Annotated[QuestionAdminService, Depends(get_admin_service)]


@router.post("", response_model=QuestionResponse, status_code=201)
@limit_upload
async def upload_question(
    request: Request,
    _: AdminSession,
    admin: Admin,
    course_code: str = Form(..., max_length=50),
    course_title: str = Form(..., max_length=300),
    department: str = Form(..., max_length=200),
    level: str = Form(...),
    semester: str = Form(...),
    session_label: str = Form(..., alias="session", max_length=20),
    file: UploadFile = File(...),
) -> QuestionResponse:
    """Store the PDF under <department>/<millis>-<filename> and create its record."""
    if not file.filename:
        raise ValidationException("Filename required", field="file")
    if file.size is not None and file.size > admin.max_upload_size:
        raise PayloadTooLargeException(admin.max_upload_size, file.size)
    created = await admin.upload(
        course_code=course_code,
        course_title=course_title,
        department=department,
        level=level,
        session=session_label,
        semester=semester,
        file_data=file.file,
        filename=file.filename,
        content_type=file.content_type,
    )
    return QuestionResponse.from_result(created)


@router.get("", response_model=list[QuestionResponse])
async def list_questions(_: AdminSession, admin: Admin) -> list[QuestionResponse]:
    return [QuestionResponse.from_result(r) for r in await admin.list_all()]


@router.delete("/{question_id}", status_code=204)
@limit_writes
async def delete_question(
    request: Request,
    question_id: UUID,
    _: AdminSession,
    admin: Admin,
) -> Response:
    """Delete the record, then its stored file."""
    await admin.delete(str(question_id))
    return Response(status_code=204)
