# src/news_vote/api/v1/endpoints/rankings.py
"""Leaderboard endpoint."""

from typing import Annotated

from fastapi import APIRouter, Query

from news_vote.core.constants import RANKING_PER_PAGE
from news_vote.schemas.common import Pagination
from news_vote.schemas.ranking import (
    CurrentUserRank,
    RankingResponse,
    RankingStatistics,
    RankingUser,
)
from news_vote.services import ranking

from ..dependencies import OptionalUserDep, SessionDep

router = APIRouter(prefix="/rankings", tags=["rankings"])


@router.get("/", response_model=RankingResponse)
async def list_ranking(
    db: SessionDep,
    current_user: OptionalUserDep,
    limit: Annotated[int, Query(ge=1, le=RANKING_PER_PAGE)] = RANKING_PER_PAGE,
    page: Annotated[int, Query(ge=1)] = 1,
) -> RankingResponse:
    """Return one page of the leaderboard plus the caller's own position."""
    rows = ranking.list_ranking(db, limit=limit, page=page)
    total = ranking.count_ranked_users(db)

    current_user_rank = None
    if current_user is not None:
        rank = ranking.user_rank(db, current_user.id)
        if rank is not None:
            current_user_rank = CurrentUserRank(rank=rank, points=current_user.total_points)

    return RankingResponse(
        rankings=[RankingUser.model_validate(row, from_attributes=True) for row in rows],
        current_user_rank=current_user_rank,
        statistics=RankingStatistics(total_ranked_users=total),
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )
