"""Vote Ledger: one immutable vote per (user, article).

``cast_vote`` is the only entry point that mutates tallies, odds and points
as a side effect of voting. The whole chain runs in a single transaction:

    insert vote -> increment tally -> recompute odds -> award VOTE_POINTS

Uniqueness comes from the database constraint on ``votes(user_id,
article_id)``; the ledger never checks for an existing vote before inserting.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from news_vote.core.constants import VOTE_POINTS
from news_vote.core.errors import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from news_vote.models.article import ARTICLE_STATUS_PUBLISHED, Article
from news_vote.models.points import SOURCE_VOTE
from news_vote.models.user import User
from news_vote.models.vote import VOTE_CHOICES, Vote
from news_vote.services import poll_store
from news_vote.services.scoring import award_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoteOutcome:
    """A recorded vote plus the article state it produced."""

    vote: Vote
    article: Article
    points_awarded: int


def cast_vote(db: Session, user_id: str, article_id: str, choice: str) -> VoteOutcome:
    """Record a vote and apply its effects atomically.

    Raises:
        ValidationError: If ``choice`` is not ``"a"`` or ``"b"``.
        NotFoundError: If the user or the article does not exist.
        InvalidStateError: If the article is not published.
        ConflictError: If the user already voted on the article.
        TransientError: If the database is unavailable; nothing was written.
    """
    if choice not in VOTE_CHOICES:
        raise ValidationError(f"Choice must be one of {', '.join(VOTE_CHOICES)}")

    try:
        status = db.execute(
            select(Article.status).where(Article.id == article_id)
        ).scalar_one_or_none()
        if status is None:
            raise NotFoundError("Article not found")
        if status != ARTICLE_STATUS_PUBLISHED:
            raise InvalidStateError("Voting is only open on published articles")
        if db.get(User, user_id) is None:
            raise NotFoundError("User not found")

        vote = Vote(user_id=user_id, article_id=article_id, choice=choice)
        db.add(vote)
        db.flush()

        poll_store.increment_tally(db, article_id, choice)
        article = poll_store.recompute_odds(db, article_id)
        award_points(db, user_id, VOTE_POINTS, SOURCE_VOTE, article_id=article_id)
        db.commit()
    except IntegrityError as err:
        db.rollback()
        logger.warning("Duplicate vote by user %s on article %s", user_id, article_id)
        raise ConflictError("User has already voted on this article") from err
    except OperationalError as err:
        db.rollback()
        logger.warning("Transient failure casting vote on %s: %s", article_id, err)
        raise TransientError("Storage temporarily unavailable") from err
    except Exception:
        db.rollback()
        raise

    logger.info(
        "User %s voted %s on article %s (%.1f/%.1f)",
        user_id,
        choice,
        article_id,
        article.choice_a_odds,
        article.choice_b_odds,
    )
    return VoteOutcome(vote=vote, article=article, points_awarded=VOTE_POINTS)


def get_user_vote(db: Session, user_id: str, article_id: str) -> str | None:
    """Return the user's choice on an article, or ``None`` if they have not voted."""
    return db.execute(
        select(Vote.choice).where(Vote.user_id == user_id, Vote.article_id == article_id)
    ).scalar_one_or_none()


def has_voted(db: Session, user_id: str, article_id: str) -> bool:
    """Return True when a vote row exists for ``(user_id, article_id)``."""
    return get_user_vote(db, user_id, article_id) is not None


def get_user_votes(db: Session, user_id: str, article_ids: Iterable[str]) -> dict[str, str]:
    """Map article id to the user's choice for every voted article among ``article_ids``."""
    ids = list(article_ids)
    if not ids:
        return {}
    rows = db.execute(
        select(Vote.article_id, Vote.choice).where(
            Vote.user_id == user_id,
            Vote.article_id.in_(ids),
        )
    ).all()
    return {row.article_id: row.choice for row in rows}
