# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import timedelta
from itertools import count
from typing import Any

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DEFAULT_LOCALE", "ja")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from news_vote.core.security import create_access_token, hash_password
from news_vote.db.session import Base, enable_sqlite_foreign_keys
from news_vote.db.session import get_db as app_get_session
from news_vote.db.time import utcnow
from news_vote.main import app as fastapi_app
from news_vote.models import Article, User
from news_vote.models.user import ROLE_ADMIN, ROLE_USER

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse-battery"
# One PBKDF2 digest shared by every fixture user.
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Services commit on their own; tables are emptied after each test.
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with optional points and age offset."""

    def _make_user(
        nickname: str | None = None,
        *,
        role: str = ROLE_USER,
        total_points: int = 0,
        created_offset: timedelta = timedelta(0),
    ) -> User:
        n = next(_USER_COUNTER)
        user = User(
            email=f"user{n}@example.com",
            password_hash=TEST_PASSWORD_HASH,
            nickname=nickname or f"user{n}",
            role=role,
            total_points=total_points,
            referral_count=0,
            created_at=utcnow() + created_offset,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted regular user."""
    return make_user("Test User")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user("Other User")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted admin."""
    return make_user("Admin", role=ROLE_ADMIN)


def _bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return _bearer(other_user)


@pytest.fixture()
def admin_token(admin_user: User) -> dict[str, str]:
    """Return authorization headers for the admin."""
    return _bearer(admin_user)


@pytest.fixture()
def make_article(db_session: Session, admin_user: User) -> Callable[..., Article]:
    """Return a factory persisting articles authored by the admin."""

    def _make_article(
        title: str = "Pizza or sushi?",
        *,
        status: str = "published",
        choice_a_text: str = "Pizza",
        choice_b_text: str = "Sushi",
        **extra: Any,
    ) -> Article:
        article = Article(
            title=title,
            content="Which one would you pick for dinner tonight?",
            choice_a_text=choice_a_text,
            choice_b_text=choice_b_text,
            status=status,
            created_by=admin_user.id,
            **extra,
        )
        db_session.add(article)
        db_session.commit()
        db_session.refresh(article)
        return article

    return _make_article


@pytest.fixture()
def test_article(make_article: Callable[..., Article]) -> Article:
    """A published Pizza/Sushi poll with no votes."""
    return make_article()


@pytest.fixture()
def token_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building authorization headers for any user."""
    return _bearer


@pytest.fixture()
def stored_points(db_session: Session) -> Callable[[str], int]:
    """Return a helper reading a user's total straight from the database."""

    def _stored_points(user_id: str) -> int:
        return db_session.execute(
            select(User.total_points).where(User.id == user_id)
        ).scalar_one()

    return _stored_points
