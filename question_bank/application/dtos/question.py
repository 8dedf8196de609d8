"""DTOs for past question use cases (no dependency on the table store)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class QuestionCreate:
    """Input for creating a past question record. file_path is the storage object path."""

    course_code: str
    course_title: str
    department: str
    level: str
    session: str
    semester: str
    file_path: str


@dataclass(frozen=True)
class QuestionResult:
    """Past question read-model."""

    id: str
    course_code: str
    course_title: str
    department: str
    level: str
    session: str
    semester: str
    file_path: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class QuestionFilters:
    """Search input: free text over title/code plus equality filters. Empty means no filter."""

    q: str | None = None
    department: str | None = None
    level: str | None = None
    session: str | None = None
    semester: str | None = None


@dataclass(frozen=True)
class ShareLink:
    """Shareable link for a document (title + public object URL)."""

    title: str
    url: str
