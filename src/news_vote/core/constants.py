"""Application-wide constants for points, pagination and text limits."""

from typing import Final

# Points
VOTE_POINTS: Final = 1
REFERRAL_POINTS: Final = 10
MAX_REFERRALS: Final = 5

# Pagination
ARTICLES_PER_PAGE: Final = 20
COMMENTS_PER_PAGE: Final = 50
RANKING_PER_PAGE: Final = 50
SHORT_NEWS_PER_PAGE: Final = 50

# Text limits
NICKNAME_MIN_LENGTH: Final = 2
NICKNAME_MAX_LENGTH: Final = 20
ARTICLE_TITLE_MAX_LENGTH: Final = 100
ARTICLE_CONTENT_MAX_LENGTH: Final = 1000
COMMENT_MAX_LENGTH: Final = 500
CHOICE_MAX_LENGTH: Final = 50
NEWS_TITLE_MAX_LENGTH: Final = 100
NEWS_SUMMARY_MAX_LENGTH: Final = 300
CATEGORY_NAME_MAX_LENGTH: Final = 50

# Odds shown before the first vote
NEUTRAL_ODDS: Final = 50.0
