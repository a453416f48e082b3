# src/news_vote/models/points.py
"""Point ledger and referral audit models."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from news_vote.db.session import Base
from news_vote.db.time import utcnow

from ._ids import new_id

SOURCE_VOTE = "vote"
SOURCE_BONUS = "bonus"
SOURCE_DAILY = "daily"
SOURCE_REFERRAL = "referral"
POINT_SOURCES = (SOURCE_VOTE, SOURCE_BONUS, SOURCE_DAILY, SOURCE_REFERRAL)


class PointAward(Base):
    """Append-only audit entry crediting a user with points.

    The sum of a user's awards equals ``User.total_points``; both are written
    in the same transaction by the scoring service.
    """

    __tablename__ = "point_awards"
    __table_args__ = (
        CheckConstraint("points > 0", name="ck_point_awards_points"),
        CheckConstraint(
            "source IN ('vote', 'bonus', 'daily', 'referral')",
            name="ck_point_awards_source",
        ),
        Index("ix_point_awards_user_id", "user_id"),
        # Storage-level backstop: one vote award per (user, article).
        Index(
            "uq_point_awards_vote",
            "user_id",
            "article_id",
            unique=True,
            sqlite_where=text("source = 'vote'"),
            postgresql_where=text("source = 'vote'"),
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    source: Mapped[str] = mapped_column(String(16), nullable=False)
    # Detached (NULL) when the article is deleted so the audit trail survives.
    article_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("articles.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class UserReferral(Base):
    """Record of a referral share that earned its sender points."""

    __tablename__ = "user_referrals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    referrer_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    referred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
