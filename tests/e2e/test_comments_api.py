"""End-to-end tests for the comment endpoints.

The app runs with in-memory persistence; every test builds a fresh app so
rate limit windows and data never leak between tests.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from grove.application.usecase.comment import MAX_NESTING
from grove.interface.api.app import create_app
from tests.conftest import make_token
from tests.di import build_test_container


@pytest.fixture
def client():
    app = create_app(container=build_test_container())
    return TestClient(app)


def auth(user_id: str = "author-1") -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


def parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def create_post(client: TestClient) -> str:
    response = client.post("/posts", json={"content": "An old oak"}, headers=auth())
    assert response.status_code == 201
    return response.json()["id"]


def create_comment(
    client: TestClient, post_id: str, parent_id: str | None = None, user="author-1"
) -> dict:
    payload = {"content": "A branch", "postId": post_id}
    if parent_id:
        payload["parentId"] = parent_id
    response = client.post("/comments", json=payload, headers=auth(user))
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateComment:
    """POST /comments."""

    def test_returns_full_record(self, client):
        """Author fields come from the token, keys are camelCase."""
        # Arrange
        post_id = create_post(client)

        # Act
        response = client.post(
            "/comments",
            json={"content": "  Lovely bark  ", "postId": post_id},
            headers=auth(),
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["postId"] == post_id
        assert body["authorId"] == "author-1"
        assert body["authorName"] == "name-author-1"
        assert body["content"] == "  Lovely bark  "
        assert body["parentId"] is None
        assert body["deletedAt"] is None
        assert body["createdAt"] == body["updatedAt"]

    def test_session_cookie_authenticates(self, client):
        post_id = create_post(client)
        client.cookies.set("authToken", make_token("author-2"))

        response = client.post("/comments", json={"content": "hi", "postId": post_id})

        assert response.status_code == 201
        assert response.json()["authorId"] == "author-2"

    def test_requires_authentication(self, client):
        post_id = create_post(client)

        response = client.post("/comments", json={"content": "hi", "postId": post_id})

        assert response.status_code == 401
        assert response.json() == {
            "error": "Authentication required",
            "code": "UNAUTHENTICATED",
        }

    def test_invalid_token(self, client):
        response = client.post(
            "/comments",
            json={"content": "hi", "postId": "p"},
            headers={"Authorization": "Bearer nonsense"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or expired token"

    def test_missing_post(self, client):
        response = client.post(
            "/comments", json={"content": "hi", "postId": "nope"}, headers=auth()
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Post not found", "code": "NOT_FOUND"}

    def test_parent_from_other_post(self, client):
        # Arrange
        first = create_post(client)
        second = create_post(client)
        parent = create_comment(client, first)

        # Act
        response = client.post(
            "/comments",
            json={"content": "hi", "postId": second, "parentId": parent["id"]},
            headers=auth(),
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_empty_content_lists_details(self, client):
        response = client.post(
            "/comments", json={"content": "", "postId": "p"}, headers=auth()
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid input"
        assert body["code"] == "VALIDATION_ERROR"
        assert any(detail.startswith("/content: ") for detail in body["details"])

    def test_unknown_fields_are_rejected(self, client):
        """Author fields can't be smuggled in the body."""
        response = client.post(
            "/comments",
            json={"content": "hi", "postId": "p", "authorId": "someone-else"},
            headers=auth(),
        )

        assert response.status_code == 400
        assert any(d.startswith("/authorId: ") for d in response.json()["details"])

    def test_script_only_content_is_rejected(self, client):
        post_id = create_post(client)

        response = client.post(
            "/comments",
            json={"content": "<script>alert(1)</script>", "postId": post_id},
            headers=auth(),
        )

        assert response.status_code == 400
        assert response.json()["details"] == ["/content: must not be empty"]

    def test_eleventh_comment_in_a_minute_is_rate_limited(self, client):
        # Arrange
        post_id = create_post(client)
        for _ in range(10):
            create_comment(client, post_id)

        # Act
        response = client.post(
            "/comments", json={"content": "one more", "postId": post_id}, headers=auth()
        )

        # Assert
        assert response.status_code == 429
        body = response.json()
        assert body["code"] == "RATE_LIMITED"
        assert body["retryAfter"] >= 1
        assert response.headers["Retry-After"] == str(body["retryAfter"])

    def test_rate_limit_applies_before_authentication(self, client):
        """Anonymous floods are throttled too."""
        for _ in range(10):
            client.post("/comments", json={"content": "x", "postId": "p"})

        response = client.post("/comments", json={"content": "x", "postId": "p"})

        assert response.status_code == 429

    def test_oversized_request_is_refused_first(self, client, monkeypatch):
        """The size check runs before authentication."""
        monkeypatch.setenv("SECURITY__UPLOAD__MAX_FILE_SIZE", "100")

        response = client.post(
            "/comments", json={"content": "x" * 1000, "postId": "p"}
        )

        assert response.status_code == 413
        assert response.json() == {
            "error": "Request too large",
            "code": "PAYLOAD_TOO_LARGE",
        }


class TestEditComment:
    """PATCH /comments/{id}."""

    def test_author_edit(self, client):
        # Arrange
        post_id = create_post(client)
        comment = create_comment(client, post_id)

        # Act
        response = client.patch(
            f"/comments/{comment['id']}", json={"content": "revised"}, headers=auth()
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["content"] == "revised"
        assert parse_time(body["updatedAt"]) > parse_time(body["createdAt"])

    def test_other_user_is_forbidden(self, client):
        post_id = create_post(client)
        comment = create_comment(client, post_id)

        response = client.patch(
            f"/comments/{comment['id']}",
            json={"content": "mine now"},
            headers=auth("author-2"),
        )

        assert response.status_code == 403
        assert response.json() == {
            "error": "Not authorized to edit this comment",
            "code": "FORBIDDEN",
        }

    def test_deleted_comment_is_not_found(self, client):
        # Arrange
        post_id = create_post(client)
        comment = create_comment(client, post_id)
        client.delete(f"/comments/{comment['id']}", headers=auth())

        # Act
        response = client.patch(
            f"/comments/{comment['id']}", json={"content": "again"}, headers=auth()
        )

        # Assert
        assert response.status_code == 404
        assert response.json()["error"] == "Comment not found or has been deleted"


class TestDeleteComment:
    """DELETE /comments/{id}."""

    def test_delete_tombstones_and_keeps_replies(self, client):
        """After deleting a parent the post still lists its reply."""
        # Arrange
        post_id = create_post(client)
        parent = create_comment(client, post_id)
        reply = create_comment(client, post_id, parent_id=parent["id"], user="author-2")

        # Act
        response = client.delete(f"/comments/{parent['id']}", headers=auth())

        # Assert
        assert response.status_code == 200
        assert response.json() == {"success": True}
        comments = client.get(f"/posts/{post_id}").json()["comments"]
        by_id = {c["id"]: c for c in comments}
        assert by_id[parent["id"]]["content"] == "[deleted]"
        assert by_id[parent["id"]]["deletedAt"] is not None
        assert by_id[reply["id"]]["parentId"] == parent["id"]

    def test_delete_twice_succeeds(self, client):
        post_id = create_post(client)
        comment = create_comment(client, post_id)

        first = client.delete(f"/comments/{comment['id']}", headers=auth())
        second = client.delete(f"/comments/{comment['id']}", headers=auth())

        assert first.status_code == 200
        assert second.status_code == 200

    def test_other_user_is_forbidden(self, client):
        post_id = create_post(client)
        comment = create_comment(client, post_id)

        response = client.delete(
            f"/comments/{comment['id']}", headers=auth("author-2")
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Not authorized to delete this comment"

    def test_missing_comment(self, client):
        response = client.delete("/comments/nope", headers=auth())

        assert response.status_code == 404
        assert response.json() == {"error": "Comment not found", "code": "NOT_FOUND"}


class TestPostsAndTree:
    """GET /posts/{id} and the nested tree."""

    def test_tree_endpoint_nests_replies(self, client):
        # Arrange
        post_id = create_post(client)
        a = create_comment(client, post_id)
        b = create_comment(client, post_id, parent_id=a["id"])

        # Act
        response = client.get(f"/posts/{post_id}/comments/tree")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["postId"] == post_id
        assert body["total"] == 2
        assert body["comments"][0]["id"] == a["id"]
        assert body["comments"][0]["replies"][0]["id"] == b["id"]
        assert body["comments"][0]["replies"][0]["isEdited"] is False

    def test_deep_thread_continues_past_nesting_limit(self, client, monkeypatch):
        """A 1100-reply chain comes back whole, split into shallow subtrees."""
        # Arrange
        monkeypatch.setenv("SECURITY__RATE_LIMITS__COMMENTS__WINDOW_SECONDS", "60")
        monkeypatch.setenv("SECURITY__RATE_LIMITS__COMMENTS__MAX_REQUESTS", "5000")
        post_id = create_post(client)
        parent_id = None
        for _ in range(1100):
            parent_id = create_comment(client, post_id, parent_id=parent_id)["id"]

        # Act
        response = client.get(f"/posts/{post_id}/comments/tree")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1100
        assert len(body["comments"]) == 1
        assert len(body["continuations"]) == 1100 // MAX_NESTING
        seen = 0
        for subtree in [*body["comments"], *body["continuations"]]:
            node = subtree
            while node:
                seen += 1
                node = node["replies"][0] if node["replies"] else None
        assert seen == 1100

    def test_missing_post(self, client):
        response = client.get("/posts/nope")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_create_post_rejects_bad_image(self, client):
        response = client.post(
            "/posts",
            json={"content": "x", "imageUrl": "ftp://nope"},
            headers=auth(),
        )

        assert response.status_code == 400
        assert any(d.startswith("/imageUrl: ") for d in response.json()["details"])


class TestPipeline:
    """Behavior shared by every response."""

    def test_security_headers_present(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Content-Security-Policy" in response.headers

    def test_error_responses_carry_security_headers(self, client):
        response = client.post("/comments", json={"content": "x", "postId": "p"})

        assert response.status_code == 401
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_unhandled_errors_carry_security_headers(self):
        """A crashing route still answers with the headers and the error body."""
        # Arrange
        app = create_app(container=build_test_container())

        async def crash():
            raise RuntimeError("boom")

        app.add_api_route("/crash", crash)
        client = TestClient(app, raise_server_exceptions=False)

        # Act
        response = client.get("/crash")

        # Assert
        assert response.status_code == 500
        assert response.json()["code"] == "INTERNAL"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert "Content-Security-Policy" in response.headers
