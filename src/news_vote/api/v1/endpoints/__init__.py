# src/news_vote/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .articles import router as articles_router
from .auth import router as auth_router
from .categories import router as categories_router
from .comments import router as comments_router
from .rankings import router as rankings_router
from .short_news import router as short_news_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "auth_router",
    "articles_router",
    "votes_router",
    "comments_router",
    "rankings_router",
    "users_router",
    "categories_router",
    "short_news_router",
    "admin_router",
]
