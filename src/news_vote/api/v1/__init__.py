# src/news_vote/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    articles_router,
    auth_router,
    categories_router,
    comments_router,
    rankings_router,
    short_news_router,
    users_router,
    votes_router,
)

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
