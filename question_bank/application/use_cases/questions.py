"""Past question operations: catalog reads and the admin upload console."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from collections.abc import Callable
from datetime import datetime
from typing import BinaryIO

from question_bank.application.dtos.question import (
    QuestionCreate,
    QuestionFilters,
    QuestionResult,
    ShareLink,
)
from question_bank.application.interfaces.repositories import IQuestionRepository
from question_bank.application.interfaces.storage import IStorageService
from question_bank.domain.enums import Level, Semester
from question_bank.domain.exceptions import (
    PayloadTooLargeException,
    QuestionBankException,
    ResourceNotFoundException,
    ValidationException,
)
from question_bank.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

RECENT_LIMIT = 3
PDF_CONTENT_TYPE = "application/pdf"
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def _sanitize_filename(filename: str) -> str:
    """Strip path components and control characters from an uploaded filename."""
    name = os.path.basename(filename.replace("\\", "/"))
    name = _CONTROL_CHARS.sub("", name).strip(". ")
    if not name:
        raise ValidationException("Filename is empty or invalid", field="file")
    return name


def build_storage_path(department: str, filename: str, now: datetime) -> str:
    """Object path for a new upload: <department>/<epoch-millis>-<filename>."""
    folder = department.replace("/", "-").replace("\\", "-").strip()
    if not folder:
        raise ValidationException("Department is required", field="department")
    if folder in (".", ".."):
        raise ValidationException(f"Invalid department: {department}", field="department")
    millis = int(now.timestamp() * 1000)
    return f"{folder}/{millis}-{_sanitize_filename(filename)}"


def _read_limited_sync(file_data: BinaryIO, max_bytes: int) -> bytes:
    """Blocking: read file_data fully, failing once it exceeds max_bytes."""
    chunks: list[bytes] = []
    total = 0
    while chunk := file_data.read(65536):
        total += len(chunk)
        if total > max_bytes:
            raise PayloadTooLargeException(max_bytes)
        chunks.append(chunk)
    return b"".join(chunks)


class QuestionCatalogService:
    """Read side: search, detail, recent, departments and share links."""

    def __init__(
        self, question_repo: IQuestionRepository, storage_service: IStorageService
    ) -> None:
        self.question_repo = question_repo
        self.storage = storage_service

    async def search(self, filters: QuestionFilters) -> list[QuestionResult]:
        return await self.question_repo.search(filters)

    async def recent(self, limit: int = RECENT_LIMIT) -> list[QuestionResult]:
        return await self.question_repo.list_recent(limit)

    async def departments(self) -> list[str]:
        return await self.question_repo.list_departments()

    async def get(self, question_id: str) -> QuestionResult:
        """Return the record. Raises ResourceNotFoundException if missing."""
        question = await self.question_repo.get_by_id(question_id)
        if question is None:
            raise ResourceNotFoundException("past_question", question_id)
        return question

    async def share_link(self, question_id: str) -> ShareLink:
        question = await self.get(question_id)
        return ShareLink(
            title=f"{question.course_code} - {question.course_title}",
            url=self.storage.public_url(question.file_path),
        )


class QuestionAdminService:
    """Write side: upload a paper (object + record), list everything, delete."""

    def __init__(
        self,
        question_repo: IQuestionRepository,
        storage_service: IStorageService,
        *,
        max_upload_size: int,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.question_repo = question_repo
        self.storage = storage_service
        self.max_upload_size = max_upload_size
        self._clock = clock

    async def upload(
        self,
        *,
        course_code: str,
        course_title: str,
        department: str,
        level: str,
        session: str,
        semester: str,
        file_data: BinaryIO,
        filename: str,
        content_type: str | None,
    ) -> QuestionResult:
        """Store the PDF, then insert its record. Returns the created record.

        The object is written first; if the insert fails the object stays
        in storage (no compensating delete).
        """
        if level not in Level.values():
            raise ValidationException(f"Invalid level: {level}", field="level")
        if semester not in Semester.values():
            raise ValidationException(f"Invalid semester: {semester}", field="semester")
        for field_name, value in (
            ("course_code", course_code),
            ("course_title", course_title),
            ("session", session),
        ):
            if not value.strip():
                raise ValidationException(f"{field_name} is required", field=field_name)
        is_pdf = (content_type or "").lower() == PDF_CONTENT_TYPE or filename.lower().endswith(".pdf")
        if not is_pdf:
            raise ValidationException("Only PDF files are accepted", field="file")

        content = await asyncio.to_thread(
            _read_limited_sync, file_data, self.max_upload_size
        )
        if not content:
            raise ValidationException("File is empty", field="file")

        file_path = build_storage_path(department, filename, self._clock())
        await self.storage.upload(file_path, content, PDF_CONTENT_TYPE)
        created = await self.question_repo.create(
            QuestionCreate(
                course_code=course_code.strip(),
                course_title=course_title.strip(),
                department=department.strip(),
                level=level,
                session=session.strip(),
                semester=semester,
                file_path=file_path,
            )
        )
        logger.info("Past question %s uploaded to %s", created.id, file_path)
        return created

    async def list_all(self) -> list[QuestionResult]:
        return await self.question_repo.search(QuestionFilters())

    async def delete(self, question_id: str) -> None:
        """Delete the record, then its object. A failed object removal is logged only."""
        deleted = await self.question_repo.delete(question_id)
        if deleted is None:
            raise ResourceNotFoundException("past_question", question_id)
        if not deleted.file_path:
            return
        try:
            removed = await self.storage.delete(deleted.file_path)
        except QuestionBankException:
            logger.warning(
                "Record %s deleted but object %s could not be removed",
                question_id,
                deleted.file_path,
                exc_info=True,
            )
            return
        if not removed:
            logger.info("Object %s was already missing", deleted.file_path)
