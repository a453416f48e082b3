# tests/services/test_scoring.py
"""Tests for point awards, referrals and point history."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from news_vote.core.constants import MAX_REFERRALS, REFERRAL_POINTS
from news_vote.core.errors import (
    LimitExceededError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from news_vote.models import PointAward, User, UserReferral
from news_vote.services import scoring, vote_ledger


def _award_sum(db_session, user_id: str) -> int:
    return db_session.execute(
        select(func.coalesce(func.sum(PointAward.points), 0)).where(PointAward.user_id == user_id)
    ).scalar_one()


@pytest.mark.parametrize("amount", [0, -5, 1.5, True])
def test_award_points_rejects_non_positive_amounts(db_session, test_user, amount) -> None:
    with pytest.raises(ValidationError):
        scoring.award_points(db_session, test_user.id, amount, "bonus")


def test_award_points_rejects_unknown_source(db_session, test_user) -> None:
    with pytest.raises(ValidationError):
        scoring.award_points(db_session, test_user.id, 5, "lottery")


def test_award_points_for_missing_user(db_session) -> None:
    with pytest.raises(NotFoundError):
        scoring.award_points(db_session, "nobody", 5, "bonus")


def test_grant_bonus_keeps_total_equal_to_award_sum(db_session, test_user, stored_points) -> None:
    assert scoring.grant_bonus(db_session, test_user.id, 7) == 7
    assert scoring.grant_bonus(db_session, test_user.id, 3) == 10
    assert stored_points(test_user.id) == _award_sum(db_session, test_user.id) == 10


def test_referral_cap(db_session, test_user, stored_points) -> None:
    for used in range(1, MAX_REFERRALS + 1):
        outcome = scoring.record_referral(db_session, test_user.id)
        assert outcome.points_awarded == REFERRAL_POINTS
        assert outcome.remaining == MAX_REFERRALS - used

    assert stored_points(test_user.id) == MAX_REFERRALS * REFERRAL_POINTS

    with pytest.raises(LimitExceededError):
        scoring.record_referral(db_session, test_user.id)

    assert stored_points(test_user.id) == MAX_REFERRALS * REFERRAL_POINTS
    assert _award_sum(db_session, test_user.id) == MAX_REFERRALS * REFERRAL_POINTS
    referrals = db_session.execute(select(func.count()).select_from(UserReferral)).scalar_one()
    assert referrals == MAX_REFERRALS
    count = db_session.execute(
        select(User.referral_count).where(User.id == test_user.id)
    ).scalar_one()
    assert count == MAX_REFERRALS


def test_storage_failure_mid_referral_rolls_back(
    db_session, monkeypatch, test_user, stored_points
) -> None:
    scoring.record_referral(db_session, test_user.id)

    def _unavailable(*args, **kwargs):
        raise OperationalError("INSERT INTO point_awards", {}, Exception("database is locked"))

    monkeypatch.setattr(scoring, "award_points", _unavailable)

    with pytest.raises(TransientError):
        scoring.record_referral(db_session, test_user.id)

    count = db_session.execute(
        select(User.referral_count).where(User.id == test_user.id)
    ).scalar_one()
    assert count == 1
    referrals = db_session.execute(select(func.count()).select_from(UserReferral)).scalar_one()
    assert referrals == 1
    assert stored_points(test_user.id) == _award_sum(db_session, test_user.id) == REFERRAL_POINTS


def test_referral_for_missing_user(db_session) -> None:
    with pytest.raises(NotFoundError):
        scoring.record_referral(db_session, "nobody")


def test_referral_status(db_session, test_user) -> None:
    assert scoring.referral_status(db_session, test_user.id) == (0, MAX_REFERRALS)
    scoring.record_referral(db_session, test_user.id)
    assert scoring.referral_status(db_session, test_user.id) == (1, MAX_REFERRALS - 1)


def test_point_history_newest_first_with_titles(
    db_session, test_user, make_article
) -> None:
    article = make_article("Tea or coffee?")
    vote_ledger.cast_vote(db_session, test_user.id, article.id, "a")
    scoring.grant_bonus(db_session, test_user.id, 5)

    history = scoring.point_history(db_session, test_user.id)
    assert [item.source for item in history] == ["bonus", "vote"]
    assert history[1].article_title == "Tea or coffee?"
    assert history[0].article_title is None


def test_totals_equal_award_sums_after_mixed_activity(
    db_session, make_user, make_article, stored_points
) -> None:
    users = [make_user() for _ in range(3)]
    articles = [make_article(f"poll {i}") for i in range(3)]
    for i, user in enumerate(users):
        for article in articles[: i + 1]:
            vote_ledger.cast_vote(db_session, user.id, article.id, "a" if i % 2 else "b")
        scoring.record_referral(db_session, user.id)

    for user in users:
        assert stored_points(user.id) == _award_sum(db_session, user.id)
