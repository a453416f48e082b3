# tests/v1/test_errors.py
"""Tests for the error envelope and message localization."""

from fastapi import status


def test_error_envelope_defaults_to_japanese(client) -> None:
    response = client.get("/api/v1/articles/missing")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    body = response.json()
    assert body["code"] == "not_found"
    assert body["detail"] == "Article not found"
    assert body["message"] == "指定されたデータが見つかりません。"


def test_error_message_follows_accept_language(client) -> None:
    response = client.get(
        "/api/v1/articles/missing", headers={"Accept-Language": "en-US,en;q=0.9"}
    )
    assert response.json()["message"] == "The requested item could not be found."


def test_conflict_message(client, auth_token, test_article) -> None:
    payload = {"article_id": test_article.id, "choice": "a"}
    client.post("/api/v1/votes/", json=payload, headers=auth_token)
    response = client.post("/api/v1/votes/", json=payload, headers=auth_token)
    assert response.json()["message"] == "この記事にはすでに投票済みです。"


def test_request_validation_uses_envelope(client, auth_token) -> None:
    response = client.post(
        "/api/v1/votes/",
        json={"choice": "a"},
        headers={**auth_token, "Accept-Language": "en"},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "validation_error"
    assert body["message"] == "Please check your input."
    assert isinstance(body["detail"], list)


def test_unknown_route_uses_envelope(client) -> None:
    response = client.get("/api/v1/nowhere")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["code"] == "not_found"
