"""Unit tests for past question operations (mocked repository and storage)."""

import io
from datetime import UTC, datetime

import pytest

from question_bank.application.dtos.question import (
    QuestionCreate,
    QuestionFilters,
    QuestionResult,
)
from question_bank.application.use_cases.questions import (
    QuestionAdminService,
    QuestionCatalogService,
    _read_limited_sync,
    _sanitize_filename,
    build_storage_path,
)
from question_bank.domain.exceptions import (
    PayloadTooLargeException,
    ResourceNotFoundException,
    ValidationException,
)
from question_bank.infrastructure.exceptions import StorageDeleteError

NOW = datetime(2024, 3, 1, 10, 0, tzinfo=UTC)


def _question(file_path: str = "CompSci/1-exam.pdf") -> QuestionResult:
    return QuestionResult(
        id="q1",
        course_code="CSC201",
        course_title="Data Structures",
        department="CompSci",
        level="200",
        session="2023/2024",
        semester="First",
        file_path=file_path,
    )


class MockQuestionRepo:
    def __init__(self, question: QuestionResult | None = None) -> None:
        self.question = question
        self.created: list[QuestionCreate] = []
        self.deleted: list[str] = []

    async def search(self, filters: QuestionFilters) -> list[QuestionResult]:
        return [self.question] if self.question else []

    async def get_by_id(self, question_id: str) -> QuestionResult | None:
        return self.question

    async def create(self, data: QuestionCreate) -> QuestionResult:
        self.created.append(data)
        return _question(data.file_path)

    async def delete(self, question_id: str) -> QuestionResult | None:
        self.deleted.append(question_id)
        return self.question


class MockStorage:
    def __init__(self, delete_error: Exception | None = None) -> None:
        self.uploads: list[tuple[str, bytes, str]] = []
        self.deletes: list[str] = []
        self.delete_error = delete_error

    async def upload(self, file_path: str, content: bytes, content_type: str) -> None:
        self.uploads.append((file_path, content, content_type))

    async def delete(self, file_path: str) -> bool:
        self.deletes.append(file_path)
        if self.delete_error:
            raise self.delete_error
        return True

    def public_url(self, file_path: str) -> str:
        return f"https://cdn.example/{file_path}"


class TestSanitizeFilename:
    def test_basename_only(self) -> None:
        assert _sanitize_filename("exam.pdf") == "exam.pdf"

    def test_path_stripped(self) -> None:
        assert _sanitize_filename("/tmp/papers/exam.pdf") == "exam.pdf"

    def test_windows_path_stripped(self) -> None:
        assert _sanitize_filename("C:\\papers\\exam.pdf") == "exam.pdf"

    def test_control_chars_removed(self) -> None:
        assert _sanitize_filename("ex\x00am\n.pdf") == "exam.pdf"

    def test_empty_after_sanitize_raises(self) -> None:
        with pytest.raises(ValidationException, match="empty or invalid"):
            _sanitize_filename("../")


def test_build_storage_path_uses_department_and_millis() -> None:
    assert build_storage_path("CompSci", "exam.pdf", NOW) == "CompSci/1709287200000-exam.pdf"


def test_build_storage_path_flattens_department_slashes() -> None:
    assert build_storage_path("Eng/Civil", "a.pdf", NOW).startswith("Eng-Civil/")


def test_build_storage_path_requires_department() -> None:
    with pytest.raises(ValidationException):
        build_storage_path("  ", "a.pdf", NOW)


@pytest.mark.parametrize("department", [".", "..", " .. "])
def test_build_storage_path_refuses_dot_departments(department: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        build_storage_path(department, "a.pdf", NOW)
    assert exc_info.value.details == {"field": "department"}


def test_read_limited_rejects_oversized_stream() -> None:
    with pytest.raises(PayloadTooLargeException):
        _read_limited_sync(io.BytesIO(b"x" * 11), 10)
    assert _read_limited_sync(io.BytesIO(b"x" * 10), 10) == b"x" * 10


def _admin(repo: MockQuestionRepo, storage: MockStorage, max_size: int = 1024):
    return QuestionAdminService(repo, storage, max_upload_size=max_size, clock=lambda: NOW)


async def _upload(admin: QuestionAdminService, **overrides):
    kwargs = {
        "course_code": " CSC201 ",
        "course_title": "Data Structures",
        "department": "CompSci",
        "level": "200",
        "session": "2023/2024",
        "semester": "First",
        "file_data": io.BytesIO(b"%PDF-1.4"),
        "filename": "exam.pdf",
        "content_type": "application/pdf",
    }
    kwargs.update(overrides)
    return await admin.upload(**kwargs)


async def test_upload_writes_object_then_record() -> None:
    repo, storage = MockQuestionRepo(), MockStorage()
    created = await _upload(_admin(repo, storage))
    assert storage.uploads == [
        ("CompSci/1709287200000-exam.pdf", b"%PDF-1.4", "application/pdf")
    ]
    (record,) = repo.created
    assert record.course_code == "CSC201"
    assert record.file_path == created.file_path


async def test_upload_accepts_pdf_by_extension() -> None:
    repo, storage = MockQuestionRepo(), MockStorage()
    await _upload(_admin(repo, storage), content_type="application/octet-stream")
    assert storage.uploads[0][2] == "application/pdf"


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"level": "50"}, "level"),
        ({"semester": "Summer"}, "semester"),
        ({"course_title": "  "}, "course_title"),
        ({"filename": "notes.txt", "content_type": "text/plain"}, "file"),
        ({"file_data": io.BytesIO(b"")}, "file"),
    ],
)
async def test_upload_validation(overrides: dict, field: str) -> None:
    repo, storage = MockQuestionRepo(), MockStorage()
    with pytest.raises(ValidationException) as exc_info:
        await _upload(_admin(repo, storage), **overrides)
    assert exc_info.value.details["field"] == field
    assert storage.uploads == []
    assert repo.created == []


async def test_upload_too_large() -> None:
    repo, storage = MockQuestionRepo(), MockStorage()
    with pytest.raises(PayloadTooLargeException):
        await _upload(_admin(repo, storage, max_size=4))
    assert storage.uploads == []


async def test_delete_missing_record() -> None:
    storage = MockStorage()
    with pytest.raises(ResourceNotFoundException):
        await _admin(MockQuestionRepo(None), storage).delete("q1")
    assert storage.deletes == []


async def test_delete_tolerates_storage_failure() -> None:
    storage = MockStorage(delete_error=StorageDeleteError("CompSci/1-exam.pdf", "boom", 500))
    repo = MockQuestionRepo(_question())
    await _admin(repo, storage).delete("q1")
    assert repo.deleted == ["q1"]
    assert storage.deletes == ["CompSci/1-exam.pdf"]


async def test_delete_does_not_swallow_unexpected_errors() -> None:
    storage = MockStorage(delete_error=RuntimeError("bug"))
    with pytest.raises(RuntimeError):
        await _admin(MockQuestionRepo(_question()), storage).delete("q1")


async def test_share_link() -> None:
    catalog = QuestionCatalogService(MockQuestionRepo(_question()), MockStorage())
    link = await catalog.share_link("q1")
    assert link.title == "CSC201 - Data Structures"
    assert link.url == "https://cdn.example/CompSci/1-exam.pdf"


async def test_get_missing_question() -> None:
    catalog = QuestionCatalogService(MockQuestionRepo(None), MockStorage())
    with pytest.raises(ResourceNotFoundException):
        await catalog.get("q9")
