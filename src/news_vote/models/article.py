# src/news_vote/models/article.py
"""SQLAlchemy models for binary-choice articles (polls)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from news_vote.core.constants import NEUTRAL_ODDS
from news_vote.db.session import Base
from news_vote.db.time import utcnow

from ._ids import new_id

ARTICLE_STATUS_DRAFT = "draft"
ARTICLE_STATUS_PUBLISHED = "published"
ARTICLE_STATUS_ARCHIVED = "archived"
ARTICLE_STATUSES = (ARTICLE_STATUS_DRAFT, ARTICLE_STATUS_PUBLISHED, ARTICLE_STATUS_ARCHIVED)


class Article(Base):
    """A short news article framed as a two-option poll.

    Tallies are denormalized counters kept equal to the number of vote rows
    per choice; odds are derived from them whenever a vote lands.
    """

    __tablename__ = "articles"
    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'published', 'archived')",
            name="ck_articles_status",
        ),
        CheckConstraint("choice_a_votes >= 0", name="ck_articles_choice_a_votes"),
        CheckConstraint("choice_b_votes >= 0", name="ck_articles_choice_b_votes"),
        Index("ix_articles_status_created_at", "status", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )

    choice_a_text: Mapped[str] = mapped_column(String(50), nullable=False)
    choice_b_text: Mapped[str] = mapped_column(String(50), nullable=False)
    choice_a_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    choice_b_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    choice_a_odds: Mapped[float] = mapped_column(Float, nullable=False, default=NEUTRAL_ODDS)
    choice_b_odds: Mapped[float] = mapped_column(Float, nullable=False, default=NEUTRAL_ODDS)

    status: Mapped[str] = mapped_column(String(16), nullable=False, default=ARTICLE_STATUS_DRAFT)
    created_by: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    @property
    def total_votes(self) -> int:
        """Return the combined tally of both choices."""
        return self.choice_a_votes + self.choice_b_votes
