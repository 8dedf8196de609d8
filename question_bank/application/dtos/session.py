"""DTOs for auth sessions (provider tokens and the resolved caller)."""

from dataclasses import dataclass

from question_bank.domain.enums import Role


@dataclass(frozen=True)
class AuthUser:
    """Subject returned by the auth provider."""

    id: str
    email: str
    name: str = ""


@dataclass(frozen=True)
class AuthTokens:
    """Token pair issued by the auth provider."""

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


@dataclass(frozen=True)
class AuthSession:
    """The resolved caller: identity, profile fields and a role resolved once."""

    user_id: str | None
    email: str | None
    role: Role
    full_name: str = ""
    department: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.role is not Role.GUEST

    @property
    def is_admin(self) -> bool:
        return self.role.is_admin

    @classmethod
    def guest(cls) -> "AuthSession":
        return cls(user_id=None, email=None, role=Role.GUEST)


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of sign-up: the new user id, and tokens when the provider issued a session."""

    user_id: str
    email: str
    tokens: AuthTokens | None = None
