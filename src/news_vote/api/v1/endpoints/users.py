# src/news_vote/api/v1/endpoints/users.py
"""Endpoints for the caller's own profile, points and referrals."""

from fastapi import APIRouter
from sqlalchemy.orm import Session

from news_vote.core.constants import MAX_REFERRALS
from news_vote.models import User
from news_vote.schemas.points import (
    ArticleRef,
    PointHistoryEntry,
    ReferralResult,
    ReferralStatus,
)
from news_vote.schemas.user import ProfileResponse, ProfileUpdateRequest
from news_vote.services import ranking, scoring
from news_vote.services import users as user_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


def _profile(db: Session, user: User) -> ProfileResponse:
    profile = ProfileResponse.model_validate(user)
    return profile.model_copy(update={"rank": ranking.user_rank(db, user.id)})


@router.get("/me", response_model=ProfileResponse)
async def get_me(current_user: CurrentUserDep, db: SessionDep) -> ProfileResponse:
    """Return the caller's profile with their leaderboard rank."""
    return _profile(db, current_user)


@router.patch("/me", response_model=ProfileResponse)
async def update_me(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ProfileResponse:
    """Change nickname and/or avatar."""
    user = user_service.update_profile(db, current_user, payload.model_dump(exclude_unset=True))
    return _profile(db, user)


@router.get("/me/points", response_model=list[PointHistoryEntry])
async def get_my_points(current_user: CurrentUserDep, db: SessionDep) -> list[PointHistoryEntry]:
    """Return the caller's point awards, newest first."""
    return [
        PointHistoryEntry(
            id=item.id,
            points=item.points,
            source=item.source,
            created_at=item.created_at,
            article=(
                ArticleRef(id=item.article_id, title=item.article_title)
                if item.article_id is not None and item.article_title is not None
                else None
            ),
        )
        for item in scoring.point_history(db, current_user.id)
    ]


@router.get("/me/referrals", response_model=ReferralStatus)
async def get_my_referrals(current_user: CurrentUserDep, db: SessionDep) -> ReferralStatus:
    """Report how many referral rewards the caller has used."""
    count, remaining = scoring.referral_status(db, current_user.id)
    return ReferralStatus(count=count, remaining=remaining, max_referrals=MAX_REFERRALS)


@router.post("/me/referrals", response_model=ReferralResult)
async def record_referral(current_user: CurrentUserDep, db: SessionDep) -> ReferralResult:
    """Credit a referral share; fails once the lifetime cap is reached."""
    outcome = scoring.record_referral(db, current_user.id)
    return ReferralResult(
        points_awarded=outcome.points_awarded,
        total_points=outcome.total_points,
        remaining=outcome.remaining,
    )
