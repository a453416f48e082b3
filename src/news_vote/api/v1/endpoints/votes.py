# src/news_vote/api/v1/endpoints/votes.py
"""Vote-related endpoints for the News Vote API."""

from fastapi import APIRouter, status

from news_vote.schemas.vote import (
    CastVoteResponse,
    MyVoteResponse,
    UpdatedOdds,
    VoteCreate,
    VoteResponse,
)
from news_vote.services import vote_ledger

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=CastVoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CastVoteResponse:
    """Vote once on a published article and receive the updated odds."""
    outcome = vote_ledger.cast_vote(db, current_user.id, vote_data.article_id, vote_data.choice)
    article = outcome.article
    return CastVoteResponse(
        vote=VoteResponse.model_validate(outcome.vote),
        updated_odds=UpdatedOdds(
            choice_a_votes=article.choice_a_votes,
            choice_b_votes=article.choice_b_votes,
            choice_a_odds=article.choice_a_odds,
            choice_b_odds=article.choice_b_odds,
        ),
        points_awarded=outcome.points_awarded,
    )


@router.get("/{article_id}/my-vote", response_model=MyVoteResponse)
async def get_my_vote(
    article_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Report whether the caller has voted on an article and how."""
    choice = vote_ledger.get_user_vote(db, current_user.id, article_id)
    return MyVoteResponse(has_voted=choice is not None, choice=choice)
