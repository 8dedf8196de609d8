"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field, model_validator

from question_bank.domain.enums import Role


class RegisterRequest(BaseModel):
    """Request body for registration."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr = Field(...)
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    confirm_password: str = Field(..., min_length=6, description="Confirm password")

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: EmailStr = Field(...)
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Token pair issued by the auth provider."""

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


class SessionResponse(BaseModel):
    """The resolved caller. role is 'guest' when no token was sent."""

    user_id: str | None = None
    email: str | None = None
    full_name: str = ""
    department: str | None = None
    role: Role
    is_authenticated: bool
    is_admin: bool


class LoginResponse(BaseModel):
    tokens: TokenResponse
    session: SessionResponse


class RegisterResponse(BaseModel):
    """Response for POST /register. tokens is null while email confirmation is pending."""

    user_id: str
    email: str
    tokens: TokenResponse | None = None


class MessageResponse(BaseModel):
    message: str
