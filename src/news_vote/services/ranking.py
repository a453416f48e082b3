"""Ranking View: the points leaderboard, aggregated at read time."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from news_vote.core.constants import RANKING_PER_PAGE
from news_vote.core.errors import NotFoundError
from news_vote.models.user import User

# Ties on points go to the older account, then to the smaller id.
LEADERBOARD_ORDER = (User.total_points.desc(), User.created_at.asc(), User.id.asc())


@dataclass(frozen=True)
class RankedUser:
    """A leaderboard row; ``rank`` is derived, never stored."""

    id: str
    nickname: str
    avatar_url: str | None
    total_points: int
    rank: int


def count_ranked_users(db: Session) -> int:
    """Return the number of users with at least one point."""
    return db.execute(
        select(func.count()).select_from(User).where(User.total_points > 0)
    ).scalar_one()


def list_ranking(db: Session, *, limit: int = RANKING_PER_PAGE, page: int = 1) -> list[RankedUser]:
    """Return one page of the leaderboard.

    Only users with points appear. ``rank`` is the 1-based position in the
    full ordering, so the first row of page 2 with ``limit=50`` is rank 51.
    """
    limit = max(1, min(limit, RANKING_PER_PAGE))
    offset = (max(page, 1) - 1) * limit
    users = (
        db.execute(
            select(User)
            .where(User.total_points > 0)
            .order_by(*LEADERBOARD_ORDER)
            .offset(offset)
            .limit(limit)
        )
        .scalars()
        .all()
    )
    return [
        RankedUser(
            id=user.id,
            nickname=user.nickname,
            avatar_url=user.avatar_url,
            total_points=user.total_points,
            rank=offset + position,
        )
        for position, user in enumerate(users, start=1)
    ]


def user_rank(db: Session, user_id: str) -> int | None:
    """Return the user's leaderboard position, or ``None`` without points.

    Uses the same positional convention as :func:`list_ranking`: one plus the
    number of users ordered strictly ahead.
    """
    row = db.execute(
        select(User.total_points, User.created_at, User.id).where(User.id == user_id)
    ).one_or_none()
    if row is None:
        raise NotFoundError("User not found")
    if row.total_points <= 0:
        return None

    ahead = db.execute(
        select(func.count())
        .select_from(User)
        .where(
            User.total_points > 0,
            or_(
                User.total_points > row.total_points,
                and_(User.total_points == row.total_points, User.created_at < row.created_at),
                and_(
                    User.total_points == row.total_points,
                    User.created_at == row.created_at,
                    User.id < row.id,
                ),
            ),
        )
    ).scalar_one()
    return ahead + 1
