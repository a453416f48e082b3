"""Comment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from news_vote.core.constants import COMMENT_MAX_LENGTH


class CommentCreate(BaseModel):
    """Schema for posting a comment.

    Length is checked again after trimming by the comment service.
    """

    content: str = Field(..., max_length=COMMENT_MAX_LENGTH * 2)
    parent_id: str | None = Field(None, description="Top-level comment being replied to")


class CommentAuthor(BaseModel):
    """Author details embedded in a comment."""

    id: str
    nickname: str
    avatar_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseModel):
    """A comment with its one level of replies."""

    id: str
    user_id: str
    article_id: str
    parent_id: str | None
    content: str
    created_at: datetime
    updated_at: datetime
    user: CommentAuthor | None = None
    replies: list[CommentResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
