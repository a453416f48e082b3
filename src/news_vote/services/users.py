"""Account helpers: registration, login, profile edits and admin management."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from news_vote.core import security
from news_vote.core.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from news_vote.models.article import Article
from news_vote.models.user import ROLE_ADMIN, ROLE_USER, USER_ROLES, User
from news_vote.models.vote import Vote

logger = logging.getLogger(__name__)

__all__ = [
    "UserSummary",
    "get_user",
    "get_user_by_email",
    "register_user",
    "authenticate",
    "update_profile",
    "list_users_for_admin",
    "set_role",
    "promote_by_email",
]


@dataclass(frozen=True)
class UserSummary:
    """A user row with activity counts for the management screen."""

    user: User
    article_count: int
    vote_count: int


def get_user(db: Session, user_id: str) -> User:
    """Return a user by primary key or raise NotFoundError."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Return the user registered with ``email``, if any."""
    return db.query(User).filter(User.email == email.strip().lower()).first()


def register_user(db: Session, *, email: str, password: str, nickname: str) -> User:
    """Create a regular account with zero points."""
    user = User(
        email=email.strip().lower(),
        password_hash=security.hash_password(password),
        nickname=nickname,
        role=ROLE_USER,
        total_points=0,
        referral_count=0,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Email address is already registered") from err
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user whose credentials match, else raise UnauthorizedError."""
    user = get_user_by_email(db, email)
    if user is None or not security.verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")
    return user


def update_profile(db: Session, user: User, changes: dict[str, object]) -> User:
    """Apply nickname/avatar edits to ``user``."""
    for key in ("nickname", "avatar_url"):
        if key in changes:
            if key == "nickname" and changes[key] is None:
                raise ValidationError("Nickname cannot be removed")
            setattr(user, key, changes[key])

    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def list_users_for_admin(
    db: Session,
    *,
    search: str | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[UserSummary]:
    """Return non-admin users, newest first, with their article and vote counts."""
    article_count = (
        select(func.count(Article.id)).where(Article.created_by == User.id).scalar_subquery()
    )
    vote_count = select(func.count(Vote.id)).where(Vote.user_id == User.id).scalar_subquery()

    stmt = (
        select(User, article_count, vote_count)
        .where(User.role != ROLE_ADMIN)
        .order_by(User.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(User.nickname.ilike(pattern), User.email.ilike(pattern)))

    return [
        UserSummary(user=user, article_count=articles, vote_count=votes)
        for user, articles, votes in db.execute(stmt).all()
    ]


def set_role(db: Session, user_id: str, role: str) -> User:
    """Change a user's role."""
    if role not in USER_ROLES:
        raise ValidationError(f"Unknown role {role!r}")
    user = get_user(db, user_id)
    user.role = role
    db.commit()
    db.refresh(user)
    logger.info("User %s role set to %s", user_id, role)
    return user


def promote_by_email(db: Session, email: str) -> User:
    """Grant the admin role to the account registered with ``email``."""
    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError(f"No user registered with {email}")
    return set_role(db, user.id, ROLE_ADMIN)
