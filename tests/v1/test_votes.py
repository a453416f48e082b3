# tests/v1/test_votes.py
"""Tests for vote-related endpoints."""

from fastapi import status
from sqlalchemy.exc import OperationalError

from news_vote.services import vote_ledger


def _vote(client, headers, article_id, choice):
    return client.post(
        "/api/v1/votes/",
        json={"article_id": article_id, "choice": choice},
        headers=headers,
    )


def test_pizza_sushi_scenario(client, make_user, token_for, test_article, stored_points) -> None:
    """One vote each keeps the odds even; a third vote for A tips them to 66.7/33.3."""
    u1, u2, u3 = make_user(), make_user(), make_user()

    assert _vote(client, token_for(u1), test_article.id, "a").status_code == status.HTTP_201_CREATED
    response = _vote(client, token_for(u2), test_article.id, "b")
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["updated_odds"] == {
        "choice_a_votes": 1,
        "choice_b_votes": 1,
        "choice_a_odds": 50.0,
        "choice_b_odds": 50.0,
    }
    assert stored_points(u1.id) == 1
    assert stored_points(u2.id) == 1

    response = _vote(client, token_for(u3), test_article.id, "a")
    odds = response.json()["updated_odds"]
    assert (odds["choice_a_votes"], odds["choice_b_votes"]) == (2, 1)
    assert (odds["choice_a_odds"], odds["choice_b_odds"]) == (66.7, 33.3)


def test_cast_vote_response_shape(client, auth_token, test_user, test_article) -> None:
    response = _vote(client, auth_token, test_article.id, "a")
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["success"] is True
    assert body["points_awarded"] == 1
    assert body["vote"]["user_id"] == test_user.id
    assert body["vote"]["choice"] == "a"


def test_double_vote_conflicts(client, auth_token, test_article) -> None:
    assert _vote(client, auth_token, test_article.id, "a").status_code == status.HTTP_201_CREATED

    response = _vote(client, auth_token, test_article.id, "b")
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["code"] == "conflict"

    article = client.get(f"/api/v1/articles/{test_article.id}").json()
    assert (article["choice_a_votes"], article["choice_b_votes"]) == (1, 0)


def test_vote_during_storage_outage(client, auth_token, test_article, monkeypatch) -> None:
    def _unavailable(*args, **kwargs):
        raise OperationalError("INSERT INTO point_awards", {}, Exception("database is locked"))

    monkeypatch.setattr(vote_ledger, "award_points", _unavailable)

    response = _vote(client, auth_token, test_article.id, "a")
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["code"] == "transient"

    article = client.get(f"/api/v1/articles/{test_article.id}").json()
    assert (article["choice_a_votes"], article["choice_b_votes"]) == (0, 0)
    my_vote = client.get(f"/api/v1/votes/{test_article.id}/my-vote", headers=auth_token)
    assert my_vote.json()["has_voted"] is False


def test_vote_invalid_choice(client, auth_token, test_article) -> None:
    response = _vote(client, auth_token, test_article.id, "c")
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_vote_nonexistent_article(client, auth_token) -> None:
    response = _vote(client, auth_token, "does-not-exist", "a")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_vote_on_draft_article(client, auth_token, make_article) -> None:
    draft = make_article(status="draft")
    response = _vote(client, auth_token, draft.id, "a")
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["code"] == "invalid_state"


def test_vote_requires_authentication(client, test_article) -> None:
    response = _vote(client, {}, test_article.id, "a")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "unauthorized"


def test_vote_with_bad_token(client, test_article) -> None:
    response = _vote(client, {"Authorization": "Bearer not-a-jwt"}, test_article.id, "a")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_my_vote(client, auth_token, test_article) -> None:
    url = f"/api/v1/votes/{test_article.id}/my-vote"
    assert client.get(url, headers=auth_token).json() == {"has_voted": False, "choice": None}

    _vote(client, auth_token, test_article.id, "b")
    assert client.get(url, headers=auth_token).json() == {"has_voted": True, "choice": "b"}
