"""Article-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from news_vote.core.constants import (
    ARTICLE_CONTENT_MAX_LENGTH,
    ARTICLE_TITLE_MAX_LENGTH,
    CHOICE_MAX_LENGTH,
)

from .common import Pagination

ArticleStatus = Literal["draft", "published", "archived"]


def _require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Field must not be blank")
    return value


class ArticleCreate(BaseModel):
    """Schema for creating a new article."""

    title: str = Field(..., max_length=ARTICLE_TITLE_MAX_LENGTH)
    content: str = Field(..., max_length=ARTICLE_CONTENT_MAX_LENGTH)
    choice_a_text: str = Field(..., max_length=CHOICE_MAX_LENGTH)
    choice_b_text: str = Field(..., max_length=CHOICE_MAX_LENGTH)
    status: Literal["draft", "published"] = "draft"
    thumbnail_url: str | None = None
    category_id: str | None = None

    @field_validator("title", "content", "choice_a_text", "choice_b_text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject blank fields and trim surrounding whitespace."""
        return _require_text(v)


class ArticleUpdate(BaseModel):
    """Partial update of an article's editable fields."""

    title: str | None = Field(None, max_length=ARTICLE_TITLE_MAX_LENGTH)
    content: str | None = Field(None, max_length=ARTICLE_CONTENT_MAX_LENGTH)
    choice_a_text: str | None = Field(None, max_length=CHOICE_MAX_LENGTH)
    choice_b_text: str | None = Field(None, max_length=CHOICE_MAX_LENGTH)
    status: ArticleStatus | None = None
    thumbnail_url: str | None = None
    category_id: str | None = None

    @field_validator("title", "content", "choice_a_text", "choice_b_text")
    @classmethod
    def validate_text(cls, v: str | None) -> str | None:
        """Reject blank fields and trim surrounding whitespace."""
        if v is None:
            return v
        return _require_text(v)


class ArticleStatusUpdate(BaseModel):
    """Lifecycle transition request."""

    status: ArticleStatus


class ArticleResponse(BaseModel):
    """Schema for article information returned by the API."""

    id: str
    title: str
    content: str
    thumbnail_url: str | None
    category_id: str | None
    choice_a_text: str
    choice_b_text: str
    choice_a_votes: int
    choice_b_votes: int
    choice_a_odds: float
    choice_b_odds: float
    status: ArticleStatus
    created_by: str
    created_at: datetime
    updated_at: datetime
    user_vote: Literal["a", "b"] | None = None

    model_config = ConfigDict(from_attributes=True)


class ArticleListResponse(BaseModel):
    """Paged article list."""

    articles: list[ArticleResponse]
    pagination: Pagination
