"""Poll Store: article records, per-choice tallies and derived odds."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from news_vote.core.constants import NEUTRAL_ODDS
from news_vote.core.errors import NotFoundError, ValidationError
from news_vote.models.article import (
    ARTICLE_STATUS_PUBLISHED,
    ARTICLE_STATUSES,
    Article,
)
from news_vote.models.category import Category
from news_vote.models.vote import CHOICE_A, CHOICE_B

logger = logging.getLogger(__name__)

STATUS_ALL = "all"

__all__ = [
    "STATUS_ALL",
    "round1",
    "compute_odds",
    "increment_tally",
    "recompute_odds",
    "get_article",
    "list_articles",
    "create_article",
    "update_article",
    "set_status",
    "delete_article",
]


def round1(value: float | Decimal) -> float:
    """Round to one decimal place, halves away from zero (``66.65 -> 66.7``)."""
    quantized = Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(quantized)


def compute_odds(choice_a_votes: int, choice_b_votes: int) -> tuple[float, float]:
    """Return ``(a_odds, b_odds)`` as percentages for the given tallies.

    Both sides are 50.0 before the first vote. Otherwise ``a_odds`` is the
    rounded share of A and ``b_odds`` its complement, so the pair always sums
    to exactly 100.0.
    """
    total = choice_a_votes + choice_b_votes
    if total == 0:
        return NEUTRAL_ODDS, NEUTRAL_ODDS

    a_odds = round1(Decimal(100 * choice_a_votes) / Decimal(total))
    b_odds = round1(Decimal(100) - Decimal(str(a_odds)))
    return a_odds, b_odds


def increment_tally(db: Session, article_id: str, choice: str) -> None:
    """Add one to the tally of ``choice`` with a relative SQL update.

    Does not commit; the caller owns the transaction.
    """
    if choice == CHOICE_A:
        values = {"choice_a_votes": Article.choice_a_votes + 1}
    elif choice == CHOICE_B:
        values = {"choice_b_votes": Article.choice_b_votes + 1}
    else:
        raise ValidationError(f"Unknown choice {choice!r}")

    result = db.execute(
        update(Article)
        .where(Article.id == article_id)
        .values(**values)
    )
    if result.rowcount == 0:
        raise NotFoundError("Article not found")


def recompute_odds(db: Session, article_id: str) -> Article:
    """Recalculate both odds from the tallies as currently stored.

    Must run in the same transaction as the tally increment it follows.
    """
    row = db.execute(
        select(Article.choice_a_votes, Article.choice_b_votes).where(Article.id == article_id)
    ).one_or_none()
    if row is None:
        raise NotFoundError("Article not found")

    a_odds, b_odds = compute_odds(row.choice_a_votes, row.choice_b_votes)
    db.execute(
        update(Article)
        .where(Article.id == article_id)
        .values(choice_a_odds=a_odds, choice_b_odds=b_odds)
    )

    article = db.get(Article, article_id, populate_existing=True)
    if article is None:
        raise NotFoundError("Article not found")
    return article


def get_article(db: Session, article_id: str, *, include_unpublished: bool = False) -> Article:
    """Return an article, hiding drafts and archived ones unless asked."""
    article = db.get(Article, article_id)
    if article is None:
        raise NotFoundError("Article not found")
    if not include_unpublished and article.status != ARTICLE_STATUS_PUBLISHED:
        raise NotFoundError("Article not found")
    return article


def list_articles(
    db: Session,
    *,
    status: str = ARTICLE_STATUS_PUBLISHED,
    page: int = 1,
    limit: int = 20,
    category_id: str | None = None,
) -> tuple[Sequence[Article], int]:
    """Return one page of articles, newest first, and the total match count."""
    if status != STATUS_ALL and status not in ARTICLE_STATUSES:
        raise ValidationError(f"Unknown status {status!r}")

    filters = []
    if status != STATUS_ALL:
        filters.append(Article.status == status)
    if category_id is not None:
        filters.append(Article.category_id == category_id)

    total = db.execute(select(func.count()).select_from(Article).where(*filters)).scalar_one()
    articles = (
        db.execute(
            select(Article)
            .where(*filters)
            .order_by(Article.created_at.desc(), Article.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        .scalars()
        .all()
    )
    return articles, total


def _check_category(db: Session, category_id: str | None) -> None:
    if category_id is not None and db.get(Category, category_id) is None:
        raise NotFoundError("Category not found")


def create_article(
    db: Session,
    *,
    created_by: str,
    title: str,
    content: str,
    choice_a_text: str,
    choice_b_text: str,
    status: str = "draft",
    thumbnail_url: str | None = None,
    category_id: str | None = None,
) -> Article:
    """Persist a new article with zero tallies and neutral odds."""
    if status not in ARTICLE_STATUSES:
        raise ValidationError(f"Unknown status {status!r}")
    _check_category(db, category_id)

    article = Article(
        title=title,
        content=content,
        choice_a_text=choice_a_text,
        choice_b_text=choice_b_text,
        choice_a_votes=0,
        choice_b_votes=0,
        choice_a_odds=NEUTRAL_ODDS,
        choice_b_odds=NEUTRAL_ODDS,
        status=status,
        thumbnail_url=thumbnail_url,
        category_id=category_id,
        created_by=created_by,
    )
    db.add(article)
    db.commit()
    db.refresh(article)
    logger.info("Created article %s (%s)", article.id, article.status)
    return article


def update_article(db: Session, article_id: str, changes: dict[str, object]) -> Article:
    """Apply partial edits; tallies and odds are never editable here."""
    article = get_article(db, article_id, include_unpublished=True)
    if "status" in changes and changes["status"] not in ARTICLE_STATUSES:
        raise ValidationError(f"Unknown status {changes['status']!r}")
    if "category_id" in changes:
        _check_category(db, changes["category_id"])  # type: ignore[arg-type]

    editable = {
        "title",
        "content",
        "choice_a_text",
        "choice_b_text",
        "status",
        "thumbnail_url",
        "category_id",
    }
    for key, value in changes.items():
        if key in editable:
            setattr(article, key, value)

    db.commit()
    db.refresh(article)
    return article


def set_status(db: Session, article_id: str, status: str) -> Article:
    """Move an article to ``status``; any transition is allowed."""
    if status not in ARTICLE_STATUSES:
        raise ValidationError(f"Unknown status {status!r}")
    article = get_article(db, article_id, include_unpublished=True)
    previous = article.status
    article.status = status
    db.commit()
    db.refresh(article)
    logger.info("Article %s status %s -> %s", article_id, previous, status)
    return article


def delete_article(db: Session, article_id: str) -> None:
    """Delete an article; its votes and comments go with it.

    Point awards earned on the article stay and lose their article link, so
    every user's total remains equal to the sum of their awards.
    """
    article = get_article(db, article_id, include_unpublished=True)
    db.delete(article)
    db.commit()
    # Votes, comments and awards were changed by ON DELETE actions.
    db.expire_all()
    logger.info("Deleted article %s", article_id)
