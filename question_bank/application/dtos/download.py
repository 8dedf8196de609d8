"""DTOs for download log use cases."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DownloadLogCreate:
    """One completed download by a user. question_id is set when the record is known."""

    user_id: str
    file_path: str
    question_id: str | None = None


@dataclass(frozen=True)
class DownloadedQuestion:
    """Question summary embedded in a download history entry."""

    id: str
    course_code: str
    course_title: str
    file_path: str


@dataclass(frozen=True)
class DownloadLogResult:
    """Download log read-model (history entry)."""

    id: str
    user_id: str
    file_path: str
    downloaded_at: datetime | None
    question: DownloadedQuestion | None = None
