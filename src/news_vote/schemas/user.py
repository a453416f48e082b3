"""User-related Pydantic schemas."""

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from news_vote.core.constants import NICKNAME_MAX_LENGTH, NICKNAME_MIN_LENGTH

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _strip_nickname(value: str) -> str:
    value = value.strip()
    if not NICKNAME_MIN_LENGTH <= len(value) <= NICKNAME_MAX_LENGTH:
        raise ValueError(
            f"Nickname must be {NICKNAME_MIN_LENGTH}-{NICKNAME_MAX_LENGTH} characters"
        )
    return value


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    email: str = Field(..., max_length=255, description="Login email address")
    password: str = Field(..., min_length=8, max_length=128, description="Account password")
    nickname: str = Field(..., description="Public display name (2-20 characters)")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize and sanity-check the email address."""
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email address is not valid")
        return v

    @field_validator("nickname")
    @classmethod
    def validate_nickname(cls, v: str) -> str:
        """Enforce nickname length bounds after trimming."""
        return _strip_nickname(v)


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(..., description="Token type (typically 'bearer')")
    user_id: str


class UserResponse(BaseModel):
    """Public view of an account."""

    id: str
    email: str
    nickname: str
    avatar_url: str | None
    role: Literal["user", "admin"]
    total_points: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(UserResponse):
    """The caller's own profile including derived rank."""

    rank: int | None = Field(None, description="Leaderboard position; null without points")


class ProfileUpdateRequest(BaseModel):
    """Schema for updating user profile information."""

    nickname: str | None = Field(None, description="Public display name (2-20 characters)")
    avatar_url: str | None = Field(None, max_length=2048)

    @field_validator("nickname")
    @classmethod
    def validate_nickname(cls, v: str | None) -> str | None:
        """Enforce nickname length bounds after trimming."""
        if v is None:
            return v
        return _strip_nickname(v)


class AdminUserResponse(UserResponse):
    """Account summary shown on the user management screen."""

    article_count: int
    vote_count: int


class RoleUpdateRequest(BaseModel):
    """Role change submitted by an admin."""

    role: Literal["user", "admin"]
