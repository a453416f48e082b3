"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .article import ArticleCreate, ArticleListResponse, ArticleResponse, ArticleUpdate
from .category import CategoryCreate, CategoryResponse, CategoryUpdate
from .comment import CommentCreate, CommentResponse
from .common import ErrorResponse, Pagination
from .points import PointHistoryEntry, ReferralResult, ReferralStatus
from .ranking import RankingResponse, RankingUser
from .short_news import ShortNewsCreate, ShortNewsResponse, ShortNewsUpdate
from .user import LoginRequest, LoginResponse, ProfileResponse, RegisterRequest, UserResponse
from .vote import CastVoteResponse, MyVoteResponse, VoteCreate

__all__ = [
    "ArticleCreate", "ArticleListResponse", "ArticleResponse", "ArticleUpdate",
    "CategoryCreate", "CategoryResponse", "CategoryUpdate",
    "CommentCreate", "CommentResponse",
    "ErrorResponse", "Pagination",
    "PointHistoryEntry", "ReferralResult", "ReferralStatus",
    "RankingResponse", "RankingUser",
    "ShortNewsCreate", "ShortNewsResponse", "ShortNewsUpdate",
    "LoginRequest", "LoginResponse", "ProfileResponse", "RegisterRequest", "UserResponse",
    "CastVoteResponse", "MyVoteResponse", "VoteCreate",
]
