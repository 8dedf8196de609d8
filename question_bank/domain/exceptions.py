"""Domain exceptions for the question bank.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class QuestionBankException(Exception):
    """Base exception for all question bank errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(QuestionBankException):
    """Raised when input validation fails (e.g. empty file, bad level)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(QuestionBankException):
    """Raised when there is no valid session (missing, expired or rejected token)."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(QuestionBankException):
    """Raised when the session's role does not allow the operation."""

    def __init__(
        self,
        required_role: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with the role the operation needs.

        Args:
            required_role: Role that would have been allowed (e.g. 'admin').
            message: Human-readable message; replaced when required_role is given.
        """
        details: dict[str, Any] = {}
        if required_role:
            message = f"Permission denied: {required_role} role required"
            details["required_role"] = required_role
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(QuestionBankException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class PayloadTooLargeException(QuestionBankException):
    """Raised when an uploaded file exceeds the configured maximum size."""

    def __init__(self, max_bytes: int, actual: int | None = None) -> None:
        details: dict[str, Any] = {"max_bytes": max_bytes}
        if actual is not None:
            details["size"] = actual
        super().__init__(
            f"File must be at most {max_bytes} bytes",
            "PAYLOAD_TOO_LARGE",
            details,
        )
