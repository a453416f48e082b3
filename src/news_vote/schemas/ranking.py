"""Leaderboard schemas."""

from pydantic import BaseModel

from .common import Pagination


class RankingUser(BaseModel):
    """A leaderboard row."""

    id: str
    nickname: str
    avatar_url: str | None = None
    total_points: int
    rank: int


class CurrentUserRank(BaseModel):
    """The caller's own position."""

    rank: int
    points: int


class RankingStatistics(BaseModel):
    """Aggregate numbers shown beside the leaderboard."""

    total_ranked_users: int


class RankingResponse(BaseModel):
    """Leaderboard page."""

    rankings: list[RankingUser]
    current_user_rank: CurrentUserRank | None = None
    statistics: RankingStatistics
    pagination: Pagination
