# src/news_vote/models/__init__.py
"""SQLAlchemy models for the News Vote application."""

from .article import Article
from .category import Category
from .comment import Comment
from .points import PointAward, UserReferral
from .short_news import ShortNews
from .user import User
from .vote import Vote

__all__ = [
    "Article",
    "Category",
    "Comment",
    "PointAward", "UserReferral",
    "ShortNews",
    "User",
    "Vote",
]
