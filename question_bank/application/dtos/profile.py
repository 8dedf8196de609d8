"""DTOs for user profile use cases."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ProfileResult:
    """Profile read-model. role is the raw stored value; Role.resolve interprets it."""

    id: str
    full_name: str
    department: str | None = None
    role: str | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProfileUpdate:
    """Settings-flow changes; None leaves a field untouched. Role is never updatable."""

    full_name: str | None = None
    department: str | None = None
