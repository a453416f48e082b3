# tests/services/test_ranking.py
"""Tests for leaderboard ordering and rank derivation."""

from datetime import timedelta

import pytest

from news_vote.core.errors import NotFoundError
from news_vote.services import ranking


def test_only_users_with_points_are_ranked(db_session, make_user) -> None:
    make_user("zero")
    make_user("some", total_points=3)

    rows = ranking.list_ranking(db_session)
    assert [row.nickname for row in rows] == ["some"]
    assert ranking.count_ranked_users(db_session) == 1


def test_ties_break_by_account_age_then_id(db_session, make_user) -> None:
    newer = make_user("newer", total_points=10)
    older = make_user("older", total_points=10, created_offset=timedelta(days=-1))
    leader = make_user("leader", total_points=20)

    rows = ranking.list_ranking(db_session)
    assert [row.id for row in rows] == [leader.id, older.id, newer.id]
    assert [row.rank for row in rows] == [1, 2, 3]


def test_ranking_is_deterministic(db_session, make_user) -> None:
    for points in (5, 5, 5, 8, 1):
        make_user(total_points=points)

    first = ranking.list_ranking(db_session)
    second = ranking.list_ranking(db_session)
    assert first == second


def test_rank_includes_page_offset(db_session, make_user) -> None:
    for points in range(5, 0, -1):
        make_user(total_points=points)

    page_two = ranking.list_ranking(db_session, limit=2, page=2)
    assert [row.rank for row in page_two] == [3, 4]
    assert [row.total_points for row in page_two] == [3, 2]


def test_user_rank_matches_list_position(db_session, make_user) -> None:
    users = [
        make_user(total_points=4),
        make_user(total_points=9),
        make_user(total_points=4, created_offset=timedelta(hours=-1)),
        make_user(total_points=1),
    ]

    for row in ranking.list_ranking(db_session):
        assert ranking.user_rank(db_session, row.id) == row.rank
    assert ranking.user_rank(db_session, users[1].id) == 1


def test_user_rank_without_points_is_none(db_session, make_user) -> None:
    user = make_user()
    assert ranking.user_rank(db_session, user.id) is None


def test_user_rank_for_missing_user(db_session) -> None:
    with pytest.raises(NotFoundError):
        ranking.user_rank(db_session, "nobody")


def test_limit_is_capped(db_session, make_user) -> None:
    for _ in range(55):
        make_user(total_points=1)
    assert len(ranking.list_ranking(db_session, limit=500)) == 50
