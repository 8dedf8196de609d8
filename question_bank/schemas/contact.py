"""Contact API schemas."""

from pydantic import BaseModel, EmailStr, Field


class ContactRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr = Field(...)
    message: str = Field(..., min_length=1, max_length=5000)
