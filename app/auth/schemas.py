from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.schemas import CamelModel, NonBlankStr


class SchoolRegisterRequest(CamelModel):
    name: NonBlankStr = Field(..., max_length=255)
    affiliation_code: NonBlankStr = Field(..., max_length=50)
    phone: NonBlankStr = Field(..., max_length=50)
    email: EmailStr
    city: NonBlankStr = Field(..., max_length=100)
    pin_code: NonBlankStr = Field(..., max_length=20)
    password: str = Field(..., min_length=8)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt only accepts up to 72 bytes
        if len(value.encode("utf-8")) > 72:
            raise ValueError("password must be at most 72 bytes")
        return value


class SchoolResponse(CamelModel):
    """Registered school as returned to clients. Never carries the password hash."""

    id: UUID
    name: str
    affiliation_code: str
    phone: str
    email: str
    city: str
    pin_code: str
    refer_code: str
    created_at: datetime


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class CurrentSchool(BaseModel):
    """Authenticated school resolved from the session token on every request."""

    id: UUID
    email: str
    refer_code: str
