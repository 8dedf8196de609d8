"""Application services: session holder."""

from question_bank.application.services.session_service import (
    AuthListener,
    SessionService,
    Subscription,
)

__all__ = ["AuthListener", "SessionService", "Subscription"]
