"""End-to-end tests for forests and the post feed."""

import pytest
from fastapi.testclient import TestClient

from grove.interface.api.app import create_app
from tests.conftest import make_token
from tests.di import build_test_container


@pytest.fixture
def client(monkeypatch):
    # Forests share the post creation bucket, give the tests some room
    monkeypatch.setenv("SECURITY__RATE_LIMITS__POSTS__WINDOW_SECONDS", "60")
    monkeypatch.setenv("SECURITY__RATE_LIMITS__POSTS__MAX_REQUESTS", "50")
    app = create_app(container=build_test_container())
    return TestClient(app)


def auth(user_id: str = "author-1") -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


def create_forest(client: TestClient, name: str) -> dict:
    response = client.post("/forests", json={"name": name}, headers=auth())
    assert response.status_code == 201, response.text
    return response.json()


def create_post(client: TestClient, content: str, forest_id: str | None = None) -> str:
    payload = {"content": content}
    if forest_id:
        payload["forestId"] = forest_id
    response = client.post("/posts", json=payload, headers=auth())
    assert response.status_code == 201, response.text
    return response.json()["id"]


class TestForests:
    """POST /forests and GET /forests."""

    def test_create_forest(self, client):
        # Act
        response = client.post(
            "/forests",
            json={"name": "  Maple Hollow ", "description": "", "isPrivate": True},
            headers=auth(),
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Maple Hollow"
        assert body["description"] is None
        assert body["isPrivate"] is True
        assert body["creatorId"] == "author-1"
        assert body["postCount"] == 0

    def test_requires_auth(self, client):
        response = client.post("/forests", json={"name": "Firs"})

        assert response.status_code == 401

    def test_duplicate_name(self, client):
        create_forest(client, "Firs")

        response = client.post("/forests", json={"name": "Firs"}, headers=auth())

        assert response.status_code == 400
        assert response.json()["error"] == "A forest with this name already exists"

    def test_name_rules(self, client):
        response = client.post("/forests", json={"name": "<b>x</b>"}, headers=auth())

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_listed_by_activity_then_age(self, client):
        # Arrange
        older = create_forest(client, "Older")
        newer = create_forest(client, "Newer")
        busy = create_forest(client, "Busy")
        create_post(client, "one", busy["id"])
        create_post(client, "two", busy["id"])

        # Act
        response = client.get("/forests")

        # Assert
        assert response.status_code == 200
        forests = response.json()["forests"]
        assert [f["id"] for f in forests] == [busy["id"], older["id"], newer["id"]]
        assert forests[0]["postCount"] == 2


class TestPostFeed:
    """GET /posts."""

    def test_feed_is_newest_first_with_comments(self, client):
        # Arrange
        first = create_post(client, "first")
        second = create_post(client, "second")
        comment = client.post(
            "/comments", json={"content": "hi", "postId": first}, headers=auth()
        ).json()
        removed = client.post(
            "/comments", json={"content": "bye", "postId": first}, headers=auth()
        ).json()
        client.delete(f"/comments/{removed['id']}", headers=auth())

        # Act
        response = client.get("/posts")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert [p["id"] for p in body["posts"]] == [second, first]
        assert body["total"] == 2
        feed_first = body["posts"][1]
        assert feed_first["commentCount"] == 1
        assert [c["id"] for c in feed_first["comments"]] == [comment["id"]]

    def test_filter_by_forest(self, client):
        # Arrange
        forest = create_forest(client, "Spruce")
        inside = create_post(client, "inside", forest["id"])
        create_post(client, "outside")

        # Act
        response = client.get("/posts", params={"forestId": forest["id"]})

        # Assert
        assert [p["id"] for p in response.json()["posts"]] == [inside]

    def test_post_into_unknown_forest(self, client):
        response = client.post(
            "/posts", json={"content": "lost", "forestId": "nowhere"}, headers=auth()
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Forest not found"

    def test_bad_paging(self, client):
        response = client.get("/posts", params={"limit": 0})

        assert response.status_code == 400
