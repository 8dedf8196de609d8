"""Domain enumerations for the question bank.

Enums represent fixed sets of domain values (roles, auth events, semesters).
"""

from enum import Enum


class Role(str, Enum):
    """Access role of the current caller.

    Resolved once per session fetch (see SessionService) and carried on the
    session; check sites compare against this enum, never against raw strings.
    """

    GUEST = "guest"
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def resolve(cls, authenticated: bool, profile_role: str | None = None) -> "Role":
        """Map authentication state and the stored profile role to a Role.

        Args:
            authenticated: Whether the caller presented a valid session.
            profile_role: Raw `role` column from the profile row, if any.

        Returns:
            GUEST when unauthenticated; ADMIN when the profile says admin
            (case-insensitive); USER otherwise.
        """
        if not authenticated:
            return cls.GUEST
        if profile_role and profile_role.strip().lower() == cls.ADMIN.value:
            return cls.ADMIN
        return cls.USER

    @property
    def is_admin(self) -> bool:
        return self is Role.ADMIN


class AuthEvent(str, Enum):
    """Auth-state changes published by SessionService to its subscribers."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"


class Semester(str, Enum):
    """Semester label stored on a past question record."""

    FIRST = "First"
    SECOND = "Second"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid semester values as strings."""
        return [s.value for s in cls]


class Level(str, Enum):
    """Study level of a past question."""

    L100 = "100"
    L200 = "200"
    L300 = "300"
    L400 = "400"
    L500 = "500"

    @classmethod
    def values(cls) -> list[str]:
        return [lv.value for lv in cls]
