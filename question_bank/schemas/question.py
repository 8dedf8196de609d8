"""Past question API schemas."""

from datetime import datetime
from urllib.parse import quote

from pydantic import BaseModel

from question_bank.application.dtos.question import QuestionResult

DOWNLOAD_PROXY_PATH = "/api/proxy-storage"


def file_url(file_path: str) -> str:
    """Download proxy URL for a stored object path."""
    return f"{DOWNLOAD_PROXY_PATH}?filePath={quote(file_path, safe='')}"


class QuestionResponse(BaseModel):
    """Past question record; file_url points at the download proxy."""

    id: str
    course_code: str
    course_title: str
    department: str
    level: str
    session: str
    semester: str
    file_path: str
    file_url: str
    created_at: datetime | None = None

    @classmethod
    def from_result(cls, q: QuestionResult) -> "QuestionResponse":
        return cls(
            id=q.id,
            course_code=q.course_code,
            course_title=q.course_title,
            department=q.department,
            level=q.level,
            session=q.session,
            semester=q.semester,
            file_path=q.file_path,
            file_url=file_url(q.file_path),
            created_at=q.created_at,
        )


class ShareLinkResponse(BaseModel):
    title: str
    url: str
