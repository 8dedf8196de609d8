"""Infrastructure exceptions for Supabase and storage operations.

All extend QuestionBankException so presentation can map them to HTTP
responses consistently. The upstream HTTP status is kept on the exception
(status_code) so callers such as the storage proxies can report it.
"""

from question_bank.domain.exceptions import QuestionBankException


class SupabaseError(QuestionBankException):
    """Non-success response (or transport failure) from a Supabase REST endpoint."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str = "UPSTREAM_ERROR",
    ) -> None:
        details: dict = {}
        if status_code is not None:
            details["upstream_status"] = status_code
        super().__init__(message, error_code, details)
        self.status_code = status_code


class StorageException(SupabaseError):
    """Base exception for storage operations."""


class StorageDownloadError(StorageException):
    """Object download failed (upstream non-2xx or network error)."""

    def __init__(
        self, file_path: str, reason: str, status_code: int | None = None
    ) -> None:
        super().__init__(
            f"Failed to download file: {file_path}",
            status_code,
            "STORAGE_DOWNLOAD_ERROR",
        )
        self.details.update({"file_path": file_path, "reason": reason})
        self.reason = reason


class StorageUploadError(StorageException):
    """Object upload failed (upstream non-2xx or network error)."""

    def __init__(
        self, file_path: str, reason: str, status_code: int | None = None
    ) -> None:
        super().__init__(
            f"Failed to upload file: {file_path}",
            status_code,
            "STORAGE_UPLOAD_ERROR",
        )
        self.details.update({"file_path": file_path, "reason": reason})
        self.reason = reason


class StorageDeleteError(StorageException):
    """Object deletion failed."""

    def __init__(
        self, file_path: str, reason: str, status_code: int | None = None
    ) -> None:
        super().__init__(
            f"Failed to delete file: {file_path}",
            status_code,
            "STORAGE_DELETE_ERROR",
        )
        self.details.update({"file_path": file_path, "reason": reason})
        self.reason = reason
