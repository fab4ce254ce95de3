"""Reply, edit and delete interactions for one post's comment thread.

The controller holds the local tree, its presentation state and the user's
drafts. Every user action returns an ``ActionResult``; failures never raise.
Successful actions patch the local tree instead of refetching, except when a
reply's parent has disappeared locally, in which case the thread is loaded
again so the new reply is still shown.
"""

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Optional, TypeVar

import logfire
from pydantic import BaseModel

from grove.adapter.error import ApiError
from grove.config import ClientSettings
from grove.domain.model import Post
from grove.domain.thread import (
    CommentNode,
    ThreadPresentation,
    VisibleNode,
    build_tree,
    find_node,
    insert_reply,
    mark_edited,
    remove_node,
)
from grove.domain.value import CollapseState, CommentId, ErrorCode, PostId

from .api import Actor, CommentApi

T = TypeVar("T")

# Action name and the comment it targets, None for the post itself
ActionKey = tuple[str, Optional[CommentId]]


class ActionStatus(str, Enum):
    """Outcome of a user action."""

    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"  # Nothing to send, or the same action is in flight
    AUTH_REQUIRED = "auth_required"
    FAILED = "failed"


class ActionResult(BaseModel):
    """Result of a user action."""

    status: ActionStatus
    error_code: Optional[ErrorCode] = None
    message: Optional[str] = None
    comment_id: Optional[CommentId] = None

    @property
    def ok(self) -> bool:
        return self.status == ActionStatus.SUCCEEDED

    @classmethod
    def succeeded(cls, comment_id: Optional[CommentId] = None) -> "ActionResult":
        return cls(status=ActionStatus.SUCCEEDED, comment_id=comment_id)

    @classmethod
    def skipped(cls, message: str) -> "ActionResult":
        return cls(status=ActionStatus.SKIPPED, message=message)

    @classmethod
    def auth_required(cls) -> "ActionResult":
        return cls(
            status=ActionStatus.AUTH_REQUIRED,
            error_code=ErrorCode.UNAUTHENTICATED,
            message="Sign in to continue",
        )

    @classmethod
    def failed(cls, code: ErrorCode, message: str) -> "ActionResult":
        return cls(status=ActionStatus.FAILED, error_code=code, message=message)


class _ActionFailed(Exception):
    def __init__(self, result: ActionResult) -> None:
        self.result = result
        super().__init__(result.message)


class CommentThreadController:
    """State and actions of one post's comment thread."""

    def __init__(
        self,
        api: CommentApi,
        post_id: PostId,
        actor: Optional[Actor] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the controller.

        Args:
            api: Grove API port
            post_id: Post whose thread is shown
            actor: Signed-in user, None when anonymous
            timeout: Seconds before a network call is abandoned, defaults
                to ``ClientSettings.timeout_seconds``
        """
        self.api = api
        self.post_id = post_id
        self.actor = actor
        self.timeout = (
            timeout if timeout is not None else ClientSettings().timeout_seconds
        )

        self.post: Optional[Post] = None
        self.roots: list[CommentNode] = []
        self.presentation = ThreadPresentation()

        # Reply drafts keyed by parent id, None for a top-level comment
        self.reply_drafts: dict[Optional[CommentId], str] = {}
        self.edit_drafts: dict[CommentId, str] = {}
        self.in_flight: set[ActionKey] = set()
        self.errors: dict[ActionKey, ActionResult] = {}

        # Set when an anonymous user tries to write
        self.register_prompt = False

    # ------------------------------------------------------------------
    # Loading and rendering
    # ------------------------------------------------------------------

    async def load(self) -> ActionResult:
        """Fetch the post and rebuild the tree. Toggles are reset."""
        try:
            result = await self._call(
                ("load", None), lambda: self.api.fetch_post_with_comments(self.post_id)
            )
        except _ActionFailed as e:
            return e.result

        self.post = result.post
        self.roots = build_tree(result.comments)
        self.presentation.reset(self.roots)
        self._forget_missing_drafts()
        logfire.info(
            "Comment thread loaded",
            post_id=str(self.post_id),
            comments=len(result.comments),
        )
        return ActionResult.succeeded()

    def visible(self) -> list[VisibleNode]:
        """Rows to render, in display order."""
        return self.presentation.visible(self.roots)

    def find(self, comment_id: CommentId) -> Optional[CommentNode]:
        return find_node(self.roots, comment_id)

    # ------------------------------------------------------------------
    # Presentation actions
    # ------------------------------------------------------------------

    def toggle(self, comment_id: CommentId) -> Optional[CollapseState]:
        """Collapse or expand a comment's replies."""
        return self.presentation.toggle(comment_id)

    def open_reply(self, parent_id: Optional[CommentId]) -> None:
        """Open the reply box below ``parent_id``, or the top-level box for None."""
        if parent_id is not None:
            self.presentation.open_reply(parent_id)
        self.reply_drafts.setdefault(parent_id, "")

    def close_reply(self, parent_id: Optional[CommentId]) -> None:
        """Close a reply box. The draft is kept."""
        if parent_id is not None:
            self.presentation.close_reply(parent_id)

    def set_draft(self, parent_id: Optional[CommentId], text: str) -> None:
        self.reply_drafts[parent_id] = text

    def draft(self, parent_id: Optional[CommentId]) -> str:
        return self.reply_drafts.get(parent_id, "")

    # ------------------------------------------------------------------
    # Reply
    # ------------------------------------------------------------------

    async def submit_reply(
        self,
        parent_id: Optional[CommentId],
        content: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> ActionResult:
        """Post a reply below ``parent_id``, or a top-level comment for None.

        Args:
            parent_id: Comment being replied to
            content: Reply text, defaults to the current draft
            image_url: Attached image

        Returns:
            Result carrying the new comment id on success
        """
        key: ActionKey = ("reply", parent_id)
        text = (content if content is not None else self.draft(parent_id)).strip()

        if not text:
            return ActionResult.skipped("Reply is empty")
        if self.actor is None:
            self.register_prompt = True
            return ActionResult.auth_required()

        try:
            created = await self._call(
                key,
                lambda: self.api.create_comment(
                    self.post_id, parent_id, text, image_url
                ),
            )
        except _ActionFailed as e:
            if content is not None:
                self.reply_drafts[parent_id] = content
            return e.result

        self.reply_drafts.pop(parent_id, None)

        node = CommentNode.from_record(created)
        if parent_id is None:
            self.roots = insert_reply(self.roots, None, node)
            self.presentation.sync(self.roots)
        elif find_node(self.roots, parent_id) is not None:
            self.roots = insert_reply(self.roots, parent_id, node)
            self.presentation.sync(self.roots)
            self.presentation.close_reply(parent_id)
            self.presentation.expand(parent_id)
        else:
            logfire.warn(
                "Reply parent missing locally, reloading thread",
                post_id=str(self.post_id),
                parent_id=str(parent_id),
            )
            await self.load()

        return ActionResult.succeeded(created.id)

    # ------------------------------------------------------------------
    # Edit
    # ------------------------------------------------------------------

    def start_edit(self, comment_id: CommentId) -> ActionResult:
        """Enter edit mode for one of the actor's own comments."""
        if self.actor is None:
            self.register_prompt = True
            return ActionResult.auth_required()

        node = find_node(self.roots, comment_id)
        refusal = self._refuse_edit(node)
        if refusal is not None:
            return refusal

        self.edit_drafts[comment_id] = node.content
        return ActionResult.succeeded(comment_id)

    def cancel_edit(self, comment_id: CommentId) -> None:
        self.edit_drafts.pop(comment_id, None)

    def set_edit_draft(self, comment_id: CommentId, text: str) -> None:
        self.edit_drafts[comment_id] = text

    def is_editing(self, comment_id: CommentId) -> bool:
        return comment_id in self.edit_drafts

    async def submit_edit(
        self, comment_id: CommentId, new_content: Optional[str] = None
    ) -> ActionResult:
        """Save an edit.

        Args:
            comment_id: Comment being edited
            new_content: New text, defaults to the edit draft

        Returns:
            Result of the edit
        """
        key: ActionKey = ("edit", comment_id)
        source = (
            new_content
            if new_content is not None
            else self.edit_drafts.get(comment_id, "")
        )
        text = source.strip()

        if not text:
            return ActionResult.skipped("Comment text is empty")
        if self.actor is None:
            self.register_prompt = True
            return ActionResult.auth_required()

        refusal = self._refuse_edit(find_node(self.roots, comment_id))
        if refusal is not None:
            return self._record(key, refusal)

        try:
            updated = await self._call(
                key, lambda: self.api.edit_comment(comment_id, text)
            )
        except _ActionFailed as e:
            self.edit_drafts[comment_id] = source
            return e.result

        self.roots = mark_edited(
            self.roots, comment_id, updated.content, updated.updated_at
        )
        self.edit_drafts.pop(comment_id, None)
        return ActionResult.succeeded(comment_id)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def request_delete(self, comment_id: CommentId) -> ActionResult:
        """Delete a comment.

        Once the server confirms, the comment and all of its replies leave the
        local view. Nothing changes locally when the server refuses.
        """
        if self.actor is None:
            self.register_prompt = True
            return ActionResult.auth_required()

        key: ActionKey = ("delete", comment_id)
        try:
            await self._call(key, lambda: self.api.delete_comment(comment_id))
        except _ActionFailed as e:
            return e.result

        self.roots = remove_node(self.roots, comment_id)
        self.presentation.sync(self.roots)
        self._forget_missing_drafts()
        return ActionResult.succeeded(comment_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _refuse_edit(self, node: Optional[CommentNode]) -> Optional[ActionResult]:
        if node is None:
            return ActionResult.failed(ErrorCode.NOT_FOUND, "Comment not found")
        if node.is_deleted:
            return ActionResult.failed(ErrorCode.NOT_FOUND, "Comment has been deleted")
        if self.actor is None or node.author.id != self.actor.user_id:
            return ActionResult.failed(
                ErrorCode.FORBIDDEN, "Not authorized to edit this comment"
            )
        return None

    def _record(self, key: ActionKey, result: ActionResult) -> ActionResult:
        self.errors[key] = result
        return result

    def _forget_missing_drafts(self) -> None:
        self.reply_drafts = {
            parent_id: text
            for parent_id, text in self.reply_drafts.items()
            if parent_id is None or parent_id in self.presentation
        }
        self.edit_drafts = {
            comment_id: text
            for comment_id, text in self.edit_drafts.items()
            if comment_id in self.presentation
        }

    async def _call(self, key: ActionKey, fn: Callable[[], Awaitable[T]]) -> T:
        """Run one network call under ``key``.

        Raises:
            _ActionFailed: With the result to hand back to the caller
        """
        if key in self.in_flight:
            raise _ActionFailed(ActionResult.skipped("Already in progress"))

        self.in_flight.add(key)
        self.errors.pop(key, None)
        try:
            return await asyncio.wait_for(fn(), timeout=self.timeout)
        except ApiError as e:
            logfire.warn(
                "Comment action failed",
                action=key[0],
                comment_id=key[1],
                code=e.code.value,
                error=e.message,
            )
            raise _ActionFailed(
                self._record(key, ActionResult.failed(e.code, e.message))
            )
        except asyncio.TimeoutError:
            logfire.warn(
                "Comment action timed out",
                action=key[0],
                comment_id=key[1],
                timeout=self.timeout,
            )
            raise _ActionFailed(
                self._record(
                    key,
                    ActionResult.failed(ErrorCode.TIMEOUT, "The request timed out"),
                )
            )
        except Exception as e:
            logfire.error(
                "Unexpected comment action error",
                action=key[0],
                comment_id=key[1],
                error=str(e),
            )
            raise _ActionFailed(
                self._record(key, ActionResult.failed(ErrorCode.INTERNAL, str(e)))
            )
        finally:
            self.in_flight.discard(key)
