"""Grove API clients for the comment thread.

``HttpCommentApi`` talks to a running Grove API over HTTP. ``MockCommentApi``
keeps posts and comments in memory and applies the same authentication and
authorship rules as the server, for tests and offline use.
"""

from typing import Any, Optional
from uuid import uuid4

import httpx
import logfire

from grove.adapter.error import ApiError
from grove.application.thread.api import Actor, CommentApi, PostWithComments
from grove.application.usecase.comment.item import DELETED_PLACEHOLDER, CommentItem
from grove.application.usecase.post.item import PostItem
from grove.config import ClientSettings
from grove.domain.model import Comment, Post
from grove.domain.model.common import utc_now
from grove.domain.value import CommentId, ErrorCode, PostId


class HttpCommentApi(CommentApi):
    """CommentApi over HTTP using httpx."""

    def __init__(
        self,
        settings: ClientSettings,
        token: Optional[str] = None,
        cookie_name: str = "authToken",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            settings: API base URL and timeout
            token: Session token, sent as a cookie
            cookie_name: Name of the session cookie
            transport: Custom httpx transport (e.g. ASGITransport in tests)
        """
        self.base_url = settings.base_url.rstrip("/")
        self.timeout = settings.timeout_seconds
        self.token = token
        self.cookie_name = cookie_name
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        cookies = {self.cookie_name: self.token} if self.token else None
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            cookies=cookies,
            transport=self.transport,
        )

    async def _request(
        self, method: str, path: str, json: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Send a request and turn every failure into an ApiError.

        Raises:
            ApiError: For transport errors, timeouts and non-2xx responses
        """
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logfire.warn("Grove API request timed out", method=method, path=path)
            raise ApiError(ErrorCode.TIMEOUT, f"Request timed out: {e}")
        except httpx.HTTPError as e:
            logfire.error(
                "Grove API request failed", method=method, path=path, error=str(e)
            )
            raise ApiError(ErrorCode.NETWORK, f"Network error: {e}")

        if response.is_success:
            return response

        raise self._error_from_response(response)

    @staticmethod
    def _error_from_response(response: httpx.Response) -> ApiError:
        """Map an error response using its ``{error, code}`` body."""
        message = response.reason_phrase or "Request failed"
        code = ErrorCode.from_status(response.status_code)
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            message = str(body.get("error") or message)
            try:
                code = ErrorCode(body.get("code"))
            except ValueError:
                pass

        logfire.warn(
            "Grove API returned an error",
            status_code=response.status_code,
            code=code.value,
            error=message,
        )
        return ApiError(code, message, status_code=response.status_code)

    async def create_comment(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        content: str,
        image_url: Optional[str] = None,
    ) -> Comment:
        """Create a comment via ``POST /comments``."""
        payload: dict[str, Any] = {"content": content, "postId": str(post_id)}
        if parent_id is not None:
            payload["parentId"] = str(parent_id)
        if image_url is not None:
            payload["imageUrl"] = image_url

        response = await self._request("POST", "/comments", json=payload)
        return CommentItem.model_validate(response.json()).to_comment()

    async def delete_comment(self, comment_id: CommentId) -> None:
        """Delete a comment via ``DELETE /comments/{id}``."""
        await self._request("DELETE", f"/comments/{comment_id}")

    async def edit_comment(self, comment_id: CommentId, content: str) -> Comment:
        """Edit a comment via ``PATCH /comments/{id}``."""
        response = await self._request(
            "PATCH", f"/comments/{comment_id}", json={"content": content}
        )
        return CommentItem.model_validate(response.json()).to_comment()

    async def fetch_post_with_comments(self, post_id: PostId) -> PostWithComments:
        """Fetch a post and its flat comment list via ``GET /posts/{id}``."""
        response = await self._request("GET", f"/posts/{post_id}")
        body = response.json()
        return PostWithComments(
            post=PostItem.model_validate(body["post"]).to_post(),
            comments=[
                CommentItem.model_validate(item).to_comment()
                for item in body.get("comments", [])
            ],
        )


class MockCommentApi(CommentApi):
    """In-memory CommentApi.

    Applies the server's rules: writes need an actor, only authors may edit or
    delete, deletes are soft and repeatable, and fetched tombstones are
    redacted.
    """

    def __init__(self, actor: Optional[Actor] = None) -> None:
        """Initialize mock API.

        Args:
            actor: User the calls are made as, None for anonymous
        """
        self.actor = actor
        self.posts: dict[PostId, Post] = {}
        self.comments: dict[CommentId, Comment] = {}
        # Names of the operations called, in order
        self.calls: list[str] = []
        # Raised by the next call instead of running it
        self.fail_next: Optional[ApiError] = None

    def add_post(self, post: Post) -> Post:
        self.posts[post.id] = post
        return post

    def add_comment(self, comment: Comment) -> Comment:
        self.comments[comment.id] = comment
        return comment

    def _begin(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error

    def _require_actor(self) -> Actor:
        if self.actor is None:
            raise ApiError(ErrorCode.UNAUTHENTICATED, "Authentication required", 401)
        return self.actor

    def _require_comment(self, comment_id: CommentId) -> Comment:
        comment = self.comments.get(comment_id)
        if comment is None:
            raise ApiError(ErrorCode.NOT_FOUND, "Comment not found", 404)
        return comment

    async def create_comment(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        content: str,
        image_url: Optional[str] = None,
    ) -> Comment:
        self._begin("create_comment")
        actor = self._require_actor()

        if post_id not in self.posts:
            raise ApiError(ErrorCode.NOT_FOUND, "Post not found", 404)
        if parent_id is not None:
            parent = self.comments.get(parent_id)
            if parent is None:
                raise ApiError(
                    ErrorCode.VALIDATION_ERROR, "Parent comment not found", 400
                )
            if parent.post_id != post_id:
                raise ApiError(
                    ErrorCode.VALIDATION_ERROR,
                    "Parent comment does not belong to this post",
                    400,
                )

        now = utc_now()
        comment = Comment(
            id=CommentId(str(uuid4())),
            post_id=post_id,
            author_id=actor.user_id,
            author_name=actor.name,
            author_avatar=actor.avatar,
            content=content,
            parent_id=parent_id,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        return self.add_comment(comment)

    async def delete_comment(self, comment_id: CommentId) -> None:
        self._begin("delete_comment")
        actor = self._require_actor()
        comment = self._require_comment(comment_id)

        if comment.author_id != actor.user_id:
            raise ApiError(
                ErrorCode.FORBIDDEN, "Not authorized to delete this comment", 403
            )
        if comment.deleted_at is None:
            self.comments[comment_id] = comment.model_copy(
                update={"deleted_at": utc_now()}
            )

    async def edit_comment(self, comment_id: CommentId, content: str) -> Comment:
        self._begin("edit_comment")
        actor = self._require_actor()
        comment = self._require_comment(comment_id)

        if comment.author_id != actor.user_id:
            raise ApiError(
                ErrorCode.FORBIDDEN, "Not authorized to edit this comment", 403
            )
        if comment.deleted_at is not None:
            raise ApiError(
                ErrorCode.NOT_FOUND, "Comment not found or has been deleted", 404
            )

        updated = comment.model_copy(
            update={"content": content, "updated_at": utc_now()}
        )
        return self.add_comment(updated)

    async def fetch_post_with_comments(self, post_id: PostId) -> PostWithComments:
        self._begin("fetch_post_with_comments")
        post = self.posts.get(post_id)
        if post is None:
            raise ApiError(ErrorCode.NOT_FOUND, "Post not found", 404)

        comments = sorted(
            (c for c in self.comments.values() if c.post_id == post_id),
            key=lambda c: c.created_at,
        )
        return PostWithComments(
            post=post,
            comments=[_redact(c) for c in comments],
        )


def _redact(comment: Comment) -> Comment:
    if comment.deleted_at is None:
        return comment
    return comment.model_copy(
        update={"content": DELETED_PLACEHOLDER, "image_url": None}
    )
