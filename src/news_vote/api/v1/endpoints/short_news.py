# src/news_vote/api/v1/endpoints/short_news.py
"""Short news endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from news_vote.core.constants import SHORT_NEWS_PER_PAGE
from news_vote.schemas.short_news import ShortNewsCreate, ShortNewsResponse, ShortNewsUpdate
from news_vote.services import short_news as short_news_service

from ..dependencies import AdminUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/short-news", tags=["short-news"])


@router.get("/", response_model=list[ShortNewsResponse])
async def list_short_news(
    db: SessionDep,
    current_user: OptionalUserDep,
    limit: Annotated[int, Query(ge=1, le=SHORT_NEWS_PER_PAGE)] = SHORT_NEWS_PER_PAGE,
) -> list[ShortNewsResponse]:
    """Return published short news, newest first; admins also see drafts."""
    include_drafts = current_user is not None and current_user.is_admin
    items = short_news_service.list_short_news(db, include_drafts=include_drafts, limit=limit)
    return [ShortNewsResponse.model_validate(item) for item in items]


@router.post("/", response_model=ShortNewsResponse, status_code=status.HTTP_201_CREATED)
async def create_short_news(
    payload: ShortNewsCreate,
    db: SessionDep,
    current_user: AdminUserDep,
) -> ShortNewsResponse:
    item = short_news_service.create_short_news(
        db, created_by=current_user.id, **payload.model_dump()
    )
    return ShortNewsResponse.model_validate(item)


@router.patch("/{news_id}", response_model=ShortNewsResponse)
async def update_short_news(
    news_id: str,
    payload: ShortNewsUpdate,
    db: SessionDep,
    current_user: AdminUserDep,
) -> ShortNewsResponse:
    item = short_news_service.update_short_news(db, news_id, payload.model_dump(exclude_unset=True))
    return ShortNewsResponse.model_validate(item)


@router.delete("/{news_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_short_news(news_id: str, db: SessionDep, current_user: AdminUserDep) -> None:
    short_news_service.delete_short_news(db, news_id)
