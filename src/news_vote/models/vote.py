# src/news_vote/models/vote.py
"""Models capturing votes on articles."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from news_vote.db.session import Base
from news_vote.db.time import utcnow

from ._ids import new_id

CHOICE_A = "a"
CHOICE_B = "b"
VOTE_CHOICES = (CHOICE_A, CHOICE_B)


class Vote(Base):
    """One user's immutable choice on one article."""

    __tablename__ = "votes"
    __table_args__ = (
        # At most one vote per (user, article); enforced by the database so that
        # concurrent requests cannot both succeed.
        UniqueConstraint("user_id", "article_id", name="uq_votes_user_article"),
        CheckConstraint("choice IN ('a', 'b')", name="ck_votes_choice"),
        Index("ix_votes_article_id", "article_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    article_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
    )
    choice: Mapped[str] = mapped_column(String(1), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
