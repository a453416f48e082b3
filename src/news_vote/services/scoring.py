"""Scoring Engine: point awards, the referral cap and point history."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from news_vote.core.constants import MAX_REFERRALS, REFERRAL_POINTS
from news_vote.core.errors import (
    LimitExceededError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from news_vote.models.article import Article
from news_vote.models.points import (
    POINT_SOURCES,
    SOURCE_BONUS,
    SOURCE_REFERRAL,
    PointAward,
    UserReferral,
)
from news_vote.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferralOutcome:
    """Result of a referral reward."""

    points_awarded: int
    total_points: int
    remaining: int


@dataclass(frozen=True)
class PointHistoryItem:
    """One award enriched with the title of the article it came from."""

    id: str
    points: int
    source: str
    created_at: datetime
    article_id: str | None
    article_title: str | None


def award_points(
    db: Session,
    user_id: str,
    amount: int,
    source: str,
    article_id: str | None = None,
) -> int:
    """Append an award and add ``amount`` to the user's total.

    Both writes join the caller's transaction; nothing is committed here.

    Returns:
        The user's new total.

    Raises:
        ValidationError: If ``amount`` is not a positive integer or ``source`` is unknown.
        NotFoundError: If the user does not exist.
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError("Point amount must be a positive integer")
    if source not in POINT_SOURCES:
        raise ValidationError(f"Unknown point source {source!r}")

    result = db.execute(
        update(User)
        .where(User.id == user_id)
        .values(total_points=User.total_points + amount)
    )
    if result.rowcount == 0:
        raise NotFoundError("User not found")

    db.add(PointAward(user_id=user_id, points=amount, source=source, article_id=article_id))
    db.flush()
    total = db.execute(select(User.total_points).where(User.id == user_id)).scalar_one()
    logger.info("Awarded %s %s point(s) to user %s", amount, source, user_id)
    return total


def record_referral(db: Session, user_id: str) -> ReferralOutcome:
    """Credit ``REFERRAL_POINTS`` for a referral share, at most ``MAX_REFERRALS`` times.

    The cap is enforced by a conditional increment, so concurrent requests
    can never push ``referral_count`` past the limit.
    """
    try:
        result = db.execute(
            update(User)
            .where(User.id == user_id, User.referral_count < MAX_REFERRALS)
            .values(referral_count=User.referral_count + 1)
        )
        if result.rowcount == 0:
            db.rollback()
            if db.get(User, user_id) is None:
                raise NotFoundError("User not found")
            logger.warning("Referral limit reached for user %s", user_id)
            raise LimitExceededError(f"Referral rewards are limited to {MAX_REFERRALS}")

        db.add(UserReferral(referrer_id=user_id))
        total = award_points(db, user_id, REFERRAL_POINTS, SOURCE_REFERRAL)
        count = db.execute(select(User.referral_count).where(User.id == user_id)).scalar_one()
        db.commit()
    except OperationalError as err:
        db.rollback()
        logger.warning("Transient failure recording referral for %s: %s", user_id, err)
        raise TransientError("Storage temporarily unavailable") from err
    except Exception:
        db.rollback()
        raise

    return ReferralOutcome(
        points_awarded=REFERRAL_POINTS,
        total_points=total,
        remaining=MAX_REFERRALS - count,
    )


def referral_status(db: Session, user_id: str) -> tuple[int, int]:
    """Return ``(count, remaining)`` referral rewards for a user."""
    count = db.execute(select(User.referral_count).where(User.id == user_id)).scalar_one_or_none()
    if count is None:
        raise NotFoundError("User not found")
    return count, max(MAX_REFERRALS - count, 0)


def grant_bonus(db: Session, user_id: str, amount: int) -> int:
    """Credit an admin-granted bonus and commit. Returns the new total."""
    try:
        total = award_points(db, user_id, amount, SOURCE_BONUS)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return total


def point_history(db: Session, user_id: str, limit: int = 100) -> list[PointHistoryItem]:
    """Return the user's awards, newest first."""
    rows = db.execute(
        select(PointAward, Article.title)
        .outerjoin(Article, Article.id == PointAward.article_id)
        .where(PointAward.user_id == user_id)
        .order_by(PointAward.created_at.desc(), PointAward.id.desc())
        .limit(limit)
    ).all()
    return [
        PointHistoryItem(
            id=award.id,
            points=award.points,
            source=award.source,
            created_at=award.created_at,
            article_id=award.article_id,
            article_title=title,
        )
        for award, title in rows
    ]
