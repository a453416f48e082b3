# tests/v1/test_categories.py
"""Tests for category endpoints."""

from fastapi import status


def _create(client, headers, slug, **extra):
    payload = {"name": slug.title(), "slug": slug, "color": "#1E90FF", **extra}
    return client.post("/api/v1/categories/", json=payload, headers=headers)


def test_admin_manages_categories(client, admin_token) -> None:
    politics = _create(client, admin_token, "politics")
    assert politics.status_code == status.HTTP_201_CREATED
    sports = _create(client, admin_token, "sports").json()

    response = client.post(
        f"/api/v1/categories/{sports['id']}/move/up", headers=admin_token
    )
    assert response.status_code == status.HTTP_200_OK

    listing = client.get("/api/v1/categories/").json()
    assert [c["slug"] for c in listing] == ["sports", "politics"]

    client.post(f"/api/v1/categories/{sports['id']}/toggle", headers=admin_token)
    assert [c["slug"] for c in client.get("/api/v1/categories/").json()] == ["politics"]
    assert len(client.get("/api/v1/categories/all", headers=admin_token).json()) == 2


def test_category_validation(client, admin_token) -> None:
    assert _create(client, admin_token, "Bad Slug").status_code == 422
    assert _create(client, admin_token, "ok", color="blue").status_code == 422


def test_duplicate_slug(client, admin_token) -> None:
    _create(client, admin_token, "tech")
    response = _create(client, admin_token, "tech")
    assert response.status_code == status.HTTP_409_CONFLICT


def test_category_update_and_delete(client, admin_token, make_article) -> None:
    category = _create(client, admin_token, "food").json()
    article = make_article(category_id=category["id"])

    response = client.patch(
        f"/api/v1/categories/{category['id']}", json={"name": "Food & Drink"}, headers=admin_token
    )
    assert response.json()["name"] == "Food & Drink"

    response = client.delete(f"/api/v1/categories/{category['id']}", headers=admin_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/articles/{article.id}").json()["category_id"] is None


def test_users_cannot_manage_categories(client, auth_token) -> None:
    assert _create(client, auth_token, "nope").status_code == status.HTTP_403_FORBIDDEN


def test_move_unknown_direction(client, admin_token) -> None:
    category = _create(client, admin_token, "misc").json()
    response = client.post(f"/api/v1/categories/{category['id']}/move/left", headers=admin_token)
    assert response.status_code == 422
