"""Domain layer: enums and exceptions (no infrastructure dependencies)."""

from question_bank.domain.enums import AuthEvent, Level, Role, Semester
from question_bank.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    PayloadTooLargeException,
    QuestionBankException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "AuthEvent",
    "AuthenticationException",
    "AuthorizationException",
    "Level",
    "PayloadTooLargeException",
    "QuestionBankException",
    "ResourceNotFoundException",
    "Role",
    "Semester",
    "ValidationException",
]
