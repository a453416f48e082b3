# src/news_vote/api/v1/endpoints/articles.py
"""Article (poll) endpoints, including the comment thread of each article."""

from collections.abc import Sequence
from typing import Annotated

from fastapi import APIRouter, Query, status
from sqlalchemy.orm import Session

from news_vote.core.constants import ARTICLES_PER_PAGE, COMMENTS_PER_PAGE
from news_vote.models import Article, User
from news_vote.models.article import ARTICLE_STATUS_PUBLISHED
from news_vote.schemas.article import (
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    ArticleStatusUpdate,
    ArticleUpdate,
)
from news_vote.schemas.comment import CommentAuthor, CommentCreate, CommentResponse
from news_vote.schemas.common import Pagination
from news_vote.services import comments as comment_service
from news_vote.services import poll_store, vote_ledger

from ..dependencies import AdminUserDep, CurrentUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/articles", tags=["articles"])


def _annotate(
    db: Session,
    articles: Sequence[Article],
    current_user: User | None,
) -> list[ArticleResponse]:
    votes: dict[str, str] = {}
    if current_user is not None:
        votes = vote_ledger.get_user_votes(db, current_user.id, [a.id for a in articles])
    return [
        ArticleResponse.model_validate(article).model_copy(update={"user_vote": votes.get(article.id)})
        for article in articles
    ]


@router.get("/", response_model=ArticleListResponse)
async def list_articles(
    db: SessionDep,
    current_user: OptionalUserDep,
    status_filter: Annotated[str, Query(alias="status")] = ARTICLE_STATUS_PUBLISHED,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = ARTICLES_PER_PAGE,
    category_id: str | None = None,
) -> ArticleListResponse:
    """List articles newest first. Only admins may see drafts or archived ones."""
    if current_user is None or not current_user.is_admin:
        status_filter = ARTICLE_STATUS_PUBLISHED

    articles, total = poll_store.list_articles(
        db,
        status=status_filter,
        page=page,
        limit=limit,
        category_id=category_id,
    )
    return ArticleListResponse(
        articles=_annotate(db, articles, current_user),
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    db: SessionDep,
    current_user: OptionalUserDep,
) -> ArticleResponse:
    """Return a single article with the caller's vote, if any."""
    is_admin = current_user is not None and current_user.is_admin
    article = poll_store.get_article(db, article_id, include_unpublished=is_admin)
    return _annotate(db, [article], current_user)[0]


@router.post("/", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    payload: ArticleCreate,
    db: SessionDep,
    current_user: AdminUserDep,
) -> ArticleResponse:
    """Create an article. Admin only."""
    article = poll_store.create_article(db, created_by=current_user.id, **payload.model_dump())
    return ArticleResponse.model_validate(article)


@router.patch("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    payload: ArticleUpdate,
    db: SessionDep,
    current_user: AdminUserDep,
) -> ArticleResponse:
    """Edit an article's text, category or status. Admin only."""
    article = poll_store.update_article(db, article_id, payload.model_dump(exclude_unset=True))
    return ArticleResponse.model_validate(article)


@router.put("/{article_id}/status", response_model=ArticleResponse)
async def set_article_status(
    article_id: str,
    payload: ArticleStatusUpdate,
    db: SessionDep,
    current_user: AdminUserDep,
) -> ArticleResponse:
    """Publish, archive or unpublish an article. Admin only."""
    article = poll_store.set_status(db, article_id, payload.status)
    return ArticleResponse.model_validate(article)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(article_id: str, db: SessionDep, current_user: AdminUserDep) -> None:
    """Delete an article together with its votes and comments. Admin only."""
    poll_store.delete_article(db, article_id)


@router.get("/{article_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    article_id: str,
    db: SessionDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=COMMENTS_PER_PAGE)] = COMMENTS_PER_PAGE,
) -> list[CommentResponse]:
    """Return top-level comments oldest first with replies nested."""
    threads = comment_service.list_comments(db, article_id, page=page, limit=limit)
    return [CommentResponse.model_validate(thread) for thread in threads]


@router.post(
    "/{article_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_comment(
    article_id: str,
    payload: CommentCreate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> CommentResponse:
    """Post a comment or a reply to a top-level comment."""
    comment = comment_service.post_comment(
        db,
        user_id=current_user.id,
        article_id=article_id,
        content=payload.content,
        parent_id=payload.parent_id,
    )
    author = CommentAuthor(
        id=current_user.id,
        nickname=current_user.nickname,
        avatar_url=current_user.avatar_url,
    )
    return CommentResponse.model_validate(comment).model_copy(update={"user": author})
