# src/news_vote/api/v1/endpoints/admin.py
"""User management endpoints for admins."""

from typing import Annotated

from fastapi import APIRouter, Query

from news_vote.schemas.points import AwardResponse, BonusRequest
from news_vote.schemas.user import AdminUserResponse, RoleUpdateRequest, UserResponse
from news_vote.services import scoring
from news_vote.services import users as user_service

from ..dependencies import AdminUserDep, SessionDep

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[AdminUserResponse])
async def list_users(
    db: SessionDep,
    current_user: AdminUserDep,
    search: str | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 100,
) -> list[AdminUserResponse]:
    """List regular users with how many articles and votes they have."""
    summaries = user_service.list_users_for_admin(db, search=search, skip=skip, limit=limit)
    return [
        AdminUserResponse(
            **UserResponse.model_validate(summary.user).model_dump(),
            article_count=summary.article_count,
            vote_count=summary.vote_count,
        )
        for summary in summaries
    ]


@router.put("/users/{user_id}/role", response_model=UserResponse)
async def set_role(
    user_id: str,
    payload: RoleUpdateRequest,
    db: SessionDep,
    current_user: AdminUserDep,
) -> UserResponse:
    """Grant or revoke the admin role."""
    return UserResponse.model_validate(user_service.set_role(db, user_id, payload.role))


@router.post("/users/{user_id}/bonus", response_model=AwardResponse)
async def grant_bonus(
    user_id: str,
    payload: BonusRequest,
    db: SessionDep,
    current_user: AdminUserDep,
) -> AwardResponse:
    """Credit bonus points to a user."""
    total = scoring.grant_bonus(db, user_id, payload.points)
    return AwardResponse(user_id=user_id, points_awarded=payload.points, total_points=total)
