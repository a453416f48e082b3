"""Short news: admin-authored headlines that are not votable."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from news_vote.core.constants import SHORT_NEWS_PER_PAGE
from news_vote.core.errors import NotFoundError
from news_vote.models.category import Category
from news_vote.models.short_news import NEWS_STATUS_PUBLISHED, ShortNews


def list_short_news(
    db: Session,
    *,
    include_drafts: bool = False,
    limit: int = SHORT_NEWS_PER_PAGE,
) -> Sequence[ShortNews]:
    """Return short news newest first; drafts only for admins."""
    stmt = select(ShortNews).order_by(ShortNews.created_at.desc(), ShortNews.id.desc())
    if not include_drafts:
        stmt = stmt.where(ShortNews.status == NEWS_STATUS_PUBLISHED)
    return db.execute(stmt.limit(min(limit, SHORT_NEWS_PER_PAGE))).scalars().all()


def get_short_news(db: Session, news_id: str) -> ShortNews:
    item = db.get(ShortNews, news_id)
    if item is None:
        raise NotFoundError("Short news not found")
    return item


def _check_category(db: Session, category_id: str | None) -> None:
    if category_id is not None and db.get(Category, category_id) is None:
        raise NotFoundError("Category not found")


def create_short_news(
    db: Session,
    *,
    created_by: str,
    title: str,
    summary: str,
    status: str = "draft",
    category_id: str | None = None,
) -> ShortNews:
    _check_category(db, category_id)
    item = ShortNews(
        title=title,
        summary=summary,
        status=status,
        category_id=category_id,
        created_by=created_by,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_short_news(db: Session, news_id: str, changes: dict[str, object]) -> ShortNews:
    item = get_short_news(db, news_id)
    if "category_id" in changes:
        _check_category(db, changes["category_id"])  # type: ignore[arg-type]
    for key in ("title", "summary", "status", "category_id"):
        if key in changes:
            setattr(item, key, changes[key])
    db.commit()
    db.refresh(item)
    return item


def delete_short_news(db: Session, news_id: str) -> None:
    item = get_short_news(db, news_id)
    db.delete(item)
    db.commit()
