"""Pydantic request/response schemas for the API."""

from question_bank.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    TokenResponse,
)
from question_bank.schemas.health import HealthResponse
from question_bank.schemas.question import QuestionResponse, ShareLinkResponse

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "QuestionResponse",
    "RegisterRequest",
    "RegisterResponse",
    "SessionResponse",
    "ShareLinkResponse",
    "TokenResponse",
]
