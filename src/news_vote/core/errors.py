"""Domain error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; the API layer renders them into a JSON
envelope carrying a stable ``code`` and a localized ``message`` (see
``news_vote.core.messages``). Each class maps to exactly one HTTP status so
callers can tell "you already voted" apart from "try again".
"""

from __future__ import annotations

from fastapi import status


class NewsVoteError(Exception):
    """Base exception for all domain failures."""

    code: str = "error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.__class__.__doc__ or self.code
        super().__init__(self.detail)


class UnauthorizedError(NewsVoteError):
    """Missing or invalid identity."""

    code = "unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(UnauthorizedError):
    """Authenticated, but not allowed to act on this resource."""

    code = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(NewsVoteError):
    """Referenced entity does not exist."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidStateError(NewsVoteError):
    """Operation not permitted in the entity's current lifecycle state."""

    code = "invalid_state"
    status_code = status.HTTP_409_CONFLICT


class ConflictError(NewsVoteError):
    """Uniqueness violation, such as a second vote on the same article."""

    code = "conflict"
    status_code = status.HTTP_409_CONFLICT


class ValidationError(NewsVoteError):
    """Malformed input."""

    code = "validation_error"
    status_code = 422


class LimitExceededError(NewsVoteError):
    """A lifetime or rate cap has been reached."""

    code = "limit_exceeded"
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


class TransientError(NewsVoteError):
    """Storage or network failure; the whole operation is safe to retry."""

    code = "transient"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


__all__ = [
    "NewsVoteError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "InvalidStateError",
    "ConflictError",
    "ValidationError",
    "LimitExceededError",
    "TransientError",
]
