"""Point ledger and referral schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ArticleRef(BaseModel):
    """Article reference attached to a point history entry."""

    id: str
    title: str


class PointHistoryEntry(BaseModel):
    """One entry of the caller's point history."""

    id: str
    points: int
    source: Literal["vote", "bonus", "daily", "referral"]
    created_at: datetime
    article: ArticleRef | None = None

    model_config = ConfigDict(from_attributes=True)


class ReferralStatus(BaseModel):
    """How many referral rewards have been used."""

    count: int
    remaining: int
    max_referrals: int


class ReferralResult(BaseModel):
    """Outcome of a successful referral reward."""

    points_awarded: int
    total_points: int
    remaining: int


class BonusRequest(BaseModel):
    """Admin-granted bonus points."""

    points: int = Field(..., gt=0, le=10_000)


class AwardResponse(BaseModel):
    """Result of crediting points."""

    user_id: str
    points_awarded: int
    total_points: int
