# tests/services/test_concurrency.py
"""Concurrent votes against a file-backed database, one session per thread."""
from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from news_vote.core.errors import ConflictError, NewsVoteError
from news_vote.core.security import hash_password
from news_vote.db.session import Base, enable_sqlite_foreign_keys
from news_vote.models import Article, PointAward, User, Vote
from news_vote.services import scoring, vote_ledger

WORKERS = 8


@pytest.fixture()
def file_engine(tmp_path: Path) -> Iterator[Engine]:
    engine = create_engine(
        f"sqlite:///{tmp_path / 'concurrency.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def file_sessions(file_engine: Engine) -> sessionmaker:
    return sessionmaker(bind=file_engine, autoflush=False, expire_on_commit=False)


def _seed(file_sessions: sessionmaker, user_count: int) -> tuple[list[str], str]:
    password_hash = hash_password("irrelevant", salt="fixed")
    with file_sessions() as db:
        admin = User(
            email="admin@example.com",
            password_hash=password_hash,
            nickname="admin",
            role="admin",
        )
        users = [
            User(email=f"voter{i}@example.com", password_hash=password_hash, nickname=f"voter{i}")
            for i in range(user_count)
        ]
        db.add_all([admin, *users])
        db.flush()
        article = Article(
            title="Pizza or sushi?",
            content="Dinner poll",
            choice_a_text="Pizza",
            choice_b_text="Sushi",
            status="published",
            created_by=admin.id,
        )
        db.add(article)
        db.commit()
        return [user.id for user in users], article.id


def _attempt(file_sessions: sessionmaker, user_id: str, article_id: str, choice: str) -> str:
    with file_sessions() as db:
        try:
            vote_ledger.cast_vote(db, user_id, article_id, choice)
        except NewsVoteError as exc:
            return exc.code
    return "ok"


def test_same_user_racing_votes_record_exactly_one(file_sessions) -> None:
    (user_id,), article_id = _seed(file_sessions, 1)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(
            pool.map(
                lambda i: _attempt(file_sessions, user_id, article_id, "a" if i % 2 else "b"),
                range(WORKERS),
            )
        )

    assert results.count("ok") == 1
    assert results.count(ConflictError.code) == WORKERS - 1

    with file_sessions() as db:
        article = db.get(Article, article_id)
        assert article.choice_a_votes + article.choice_b_votes == 1
        assert db.execute(select(func.count()).select_from(Vote)).scalar_one() == 1
        assert db.execute(select(User.total_points).where(User.id == user_id)).scalar_one() == 1
        assert db.execute(select(func.count()).select_from(PointAward)).scalar_one() == 1


def test_distinct_users_voting_concurrently_are_all_counted(file_sessions) -> None:
    user_ids, article_id = _seed(file_sessions, WORKERS)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(
            pool.map(
                lambda pair: _attempt(
                    file_sessions, pair[1], article_id, "a" if pair[0] < 6 else "b"
                ),
                enumerate(user_ids),
            )
        )

    assert results == ["ok"] * WORKERS
    with file_sessions() as db:
        article = db.get(Article, article_id)
        assert (article.choice_a_votes, article.choice_b_votes) == (6, 2)
        assert (article.choice_a_odds, article.choice_b_odds) == (75.0, 25.0)


def test_racing_referrals_never_exceed_the_cap(file_sessions) -> None:
    (user_id,), _ = _seed(file_sessions, 1)

    def _refer(_: int) -> str:
        with file_sessions() as db:
            try:
                scoring.record_referral(db, user_id)
            except NewsVoteError as exc:
                return exc.code
        return "ok"

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(pool.map(_refer, range(WORKERS)))

    assert results.count("ok") == 5
    assert results.count("limit_exceeded") == WORKERS - 5
    with file_sessions() as db:
        assert db.execute(select(User.total_points).where(User.id == user_id)).scalar_one() == 50
