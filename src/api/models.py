"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.domain.credentials import MAX_PASSWORD_BYTES

TEN_DIGITS = r"^[0-9]{10}$"


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(
        ...,
        min_length=6,
        description=f"User password (min 6 characters, max {MAX_PASSWORD_BYTES} bytes UTF-8)",
    )
    phone: str | None = Field(None, pattern=TEN_DIGITS, description="10-digit phone number")
    occupation: str | None = Field(None, max_length=100)
    source: str | None = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # max_length counts characters; bcrypt limits bytes
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class ResendVerificationRequest(BaseModel):
    email: EmailStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class UserSummary(BaseModel):
    id: str
    name: str
    email: str


class LoginResponse(BaseModel):
    """Response model for successful login. The credential travels in the cookie."""

    message: str
    user: UserSummary


class UserResponse(BaseModel):
    """
    Current user as returned by GET /me.

    Built from the domain User, which carries no password or token
    fields, so none can leak through this model.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str | None = None
    occupation: str | None = None
    source: str | None = None
    email_verified: bool
    created_at: datetime
    updated_at: datetime


class DemoRequestCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    contact: str = Field(..., pattern=TEN_DIGITS, description="10-digit contact number")
    designation: str | None = Field(None, max_length=100)


class ContactMessageCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    message: str = Field(..., min_length=1, max_length=5000)
    phone: str | None = Field(None, pattern=TEN_DIGITS)
    subject: str | None = Field(None, max_length=150)


class SubmissionResponse(BaseModel):
    """Response model for stored form submissions."""

    message: str
    id: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
