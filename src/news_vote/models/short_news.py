# src/news_vote/models/short_news.py
"""SQLAlchemy model for short news items."""
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from news_vote.db.session import Base
from news_vote.db.time import utcnow

from ._ids import new_id

NEWS_STATUS_DRAFT = "draft"
NEWS_STATUS_PUBLISHED = "published"
NEWS_STATUSES = (NEWS_STATUS_DRAFT, NEWS_STATUS_PUBLISHED)


class ShortNews(Base):
    """Headline plus summary published by an admin; not votable."""

    __tablename__ = "short_news"
    __table_args__ = (
        CheckConstraint("status IN ('draft', 'published')", name="ck_short_news_status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    summary: Mapped[str] = mapped_column(String(300), nullable=False)
    category_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=NEWS_STATUS_DRAFT)
    created_by: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
