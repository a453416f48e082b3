"""Short news schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from news_vote.core.constants import NEWS_SUMMARY_MAX_LENGTH, NEWS_TITLE_MAX_LENGTH


class ShortNewsCreate(BaseModel):
    """Schema for creating a short news item."""

    title: str = Field(..., max_length=NEWS_TITLE_MAX_LENGTH)
    summary: str = Field(..., max_length=NEWS_SUMMARY_MAX_LENGTH)
    status: Literal["draft", "published"] = "draft"
    category_id: str | None = None

    @field_validator("title", "summary")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject blank fields and trim surrounding whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Field must not be blank")
        return v


class ShortNewsUpdate(BaseModel):
    """Partial update of a short news item."""

    title: str | None = Field(None, max_length=NEWS_TITLE_MAX_LENGTH)
    summary: str | None = Field(None, max_length=NEWS_SUMMARY_MAX_LENGTH)
    status: Literal["draft", "published"] | None = None
    category_id: str | None = None

    @field_validator("title", "summary")
    @classmethod
    def validate_text(cls, v: str | None) -> str | None:
        """Reject blank fields and trim surrounding whitespace."""
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Field must not be blank")
        return v


class ShortNewsResponse(BaseModel):
    """Short news item as returned by the API."""

    id: str
    title: str
    summary: str
    category_id: str | None
    status: Literal["draft", "published"]
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
