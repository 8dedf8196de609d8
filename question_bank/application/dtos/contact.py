"""DTOs for contact messages."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactMessageCreate:
    name: str
    email: str
    message: str
