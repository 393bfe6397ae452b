"""User and session data models."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, model_validator

from app.utils.helpers import generate_uuid, utcnow


class SignUpRequest(BaseModel):
    """Account creation request."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "SignUpRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserInDB(BaseModel):
    """User model as stored in database."""

    id: str = Field(default_factory=generate_uuid)
    email: EmailStr
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow)


class UserResponse(BaseModel):
    """User fields safe to return to clients."""

    id: str
    email: EmailStr
    created_at: datetime


class SessionInDB(BaseModel):
    token: str
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime


class SessionResponse(BaseModel):
    """Issued bearer token."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse
