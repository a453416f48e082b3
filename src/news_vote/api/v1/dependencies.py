"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from news_vote.core.errors import ForbiddenError, UnauthorizedError
from news_vote.core.security import decode_access_token
from news_vote.db.session import get_db
from news_vote.models import User

# Missing credentials are reported by get_current_user, not by the scheme itself.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _user_from_credentials(
    credentials: HTTPAuthorizationCredentials | None,
    db: Session,
) -> User:
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    user_id = decode_access_token(credentials.credentials)
    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        UnauthorizedError: If the token is missing, invalid, or names no user.
    """
    return _user_from_credentials(credentials, db)


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Return the caller when a bearer token is sent, else None.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    return _user_from_credentials(credentials, db)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def get_current_admin(current_user: CurrentUserDep) -> User:
    """Require the authoring (admin) role."""
    if not current_user.is_admin:
        raise ForbiddenError("Admin role required")
    return current_user


AdminUserDep = Annotated[User, Depends(get_current_admin)]
