"""Download log API schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DownloadLogRequest(BaseModel):
    """Request body for POST /downloads: the record id, or a raw storage path."""

    question_id: UUID | None = None
    file_path: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def one_target(self) -> "DownloadLogRequest":
        if not self.question_id and not self.file_path:
            raise ValueError("question_id or file_path is required")
        return self


class DownloadedQuestionItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    course_code: str
    course_title: str
    file_path: str


class DownloadLogResponse(BaseModel):
    """Download history entry with the linked question, when known."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    file_path: str
    downloaded_at: datetime | None = None
    question: DownloadedQuestionItem | None = None
