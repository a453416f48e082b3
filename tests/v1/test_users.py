# tests/v1/test_users.py
"""Tests for the caller's profile, point history and referrals."""

from fastapi import status


def test_get_me(client, auth_token, test_user) -> None:
    response = client.get("/api/v1/users/me", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["id"] == test_user.id
    assert body["rank"] is None
    assert "password_hash" not in body


def test_get_me_requires_token(client) -> None:
    response = client.get("/api/v1/users/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_update_profile(client, auth_token) -> None:
    response = client.patch(
        "/api/v1/users/me",
        json={"nickname": "  Renamed ", "avatar_url": "https://cdn.example.com/a.png"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["nickname"] == "Renamed"
    assert response.json()["avatar_url"] == "https://cdn.example.com/a.png"


def test_update_profile_rejects_long_nickname(client, auth_token) -> None:
    response = client.patch(
        "/api/v1/users/me",
        json={"nickname": "x" * 21},
        headers=auth_token,
    )
    assert response.status_code == 422


def test_referrals_capped_at_five(client, auth_token) -> None:
    for expected_remaining in range(4, -1, -1):
        response = client.post("/api/v1/users/me/referrals", headers=auth_token)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["points_awarded"] == 10
        assert response.json()["remaining"] == expected_remaining

    response = client.post("/api/v1/users/me/referrals", headers=auth_token)
    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.json()["code"] == "limit_exceeded"

    me = client.get("/api/v1/users/me", headers=auth_token).json()
    assert me["total_points"] == 50
    assert me["rank"] == 1

    status_body = client.get("/api/v1/users/me/referrals", headers=auth_token).json()
    assert status_body == {"count": 5, "remaining": 0, "max_referrals": 5}


def test_point_history(client, auth_token, test_article) -> None:
    client.post(
        "/api/v1/votes/", json={"article_id": test_article.id, "choice": "b"}, headers=auth_token
    )
    client.post("/api/v1/users/me/referrals", headers=auth_token)

    history = client.get("/api/v1/users/me/points", headers=auth_token).json()
    assert [entry["source"] for entry in history] == ["referral", "vote"]
    assert history[1]["article"] == {"id": test_article.id, "title": test_article.title}
    assert sum(entry["points"] for entry in history) == 11
