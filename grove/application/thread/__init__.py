"""Client-side comment thread: API port and interaction controller."""

from .api import Actor, CommentApi, PostWithComments
from .controller import ActionResult, ActionStatus, CommentThreadController

__all__ = [
    "Actor",
    "CommentApi",
    "PostWithComments",
    "ActionResult",
    "ActionStatus",
    "CommentThreadController",
]
