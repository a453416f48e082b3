"""Vote-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    article_id: str
    choice: Literal["a", "b"] = Field(..., description="'a' or 'b'")


class VoteResponse(BaseModel):
    """A recorded vote."""

    id: str
    user_id: str
    article_id: str
    choice: Literal["a", "b"]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UpdatedOdds(BaseModel):
    """Tallies and odds of an article right after a vote."""

    choice_a_votes: int
    choice_b_votes: int
    choice_a_odds: float
    choice_b_odds: float


class CastVoteResponse(BaseModel):
    """Result of a successful vote."""

    success: bool = True
    vote: VoteResponse
    updated_odds: UpdatedOdds
    points_awarded: int


class MyVoteResponse(BaseModel):
    """Whether, and how, the caller voted on an article."""

    has_voted: bool
    choice: Literal["a", "b"] | None = None
