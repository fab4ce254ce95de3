"""Collapse/expand state for a rendered comment thread.

Each node is either Expanded or Collapsed. Roots start Expanded and every
reply starts Collapsed. A node's replies are rendered only while the node
itself is Expanded, so one Collapsed ancestor hides everything below it
whatever the descendants' own states are.

State lives for one view of one post and is thrown away when the tree is
fetched again.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel

from grove.domain.model.common import DomainModel
from grove.domain.thread.builder import iter_tree
from grove.domain.thread.node import CommentNode
from grove.domain.value import CollapseState, CommentId

# Display indent stops growing past this depth
MAX_INDENT = 4


class NodeState(BaseModel):
    """Presentation state of one node."""

    depth: int
    collapsed: bool
    reply_count: int = 0

    @property
    def state(self) -> CollapseState:
        """Collapse state as an enum."""
        return CollapseState.COLLAPSED if self.collapsed else CollapseState.EXPANDED


class VisibleNode(DomainModel):
    """A node as it should be rendered."""

    node: CommentNode
    depth: int
    indent: int
    collapsed: bool
    hidden_replies: int
    reply_open: bool = False

    @property
    def hidden_label(self) -> Optional[str]:
        """Caption for collapsed replies, e.g. "2 hidden replies"."""
        if not self.hidden_replies:
            return None
        noun = "reply" if self.hidden_replies == 1 else "replies"
        return f"{self.hidden_replies} hidden {noun}"

    @property
    def is_edited(self) -> bool:
        return self.node.is_edited

    @property
    def is_deleted(self) -> bool:
        return self.node.is_deleted


def default_collapsed(depth: int) -> bool:
    """Initial state: roots expanded, replies collapsed."""
    return depth > 0


def display_indent(depth: int) -> int:
    """Visual indent level for a node at ``depth``."""
    return min(depth, MAX_INDENT)


class ThreadPresentation:
    """Per-node collapse state for one comment tree."""

    def __init__(self) -> None:
        self._states: dict[CommentId, NodeState] = {}
        self._reply_open: set[CommentId] = set()

    @classmethod
    def from_tree(cls, roots: Sequence[CommentNode]) -> "ThreadPresentation":
        """Fresh presentation with default states for ``roots``."""
        presentation = cls()
        presentation.reset(roots)
        return presentation

    def reset(self, roots: Sequence[CommentNode]) -> None:
        """Forget all toggles and start again from the defaults."""
        self._states = {}
        self._reply_open = set()
        self.sync(roots)

    def sync(self, roots: Sequence[CommentNode]) -> None:
        """Follow a locally edited tree.

        Known nodes keep their state, new nodes get the default for their
        depth, and nodes that left the tree are forgotten.
        """
        states: dict[CommentId, NodeState] = {}
        for node, depth in iter_tree(roots):
            if node.id in states:
                continue
            previous = self._states.get(node.id)
            collapsed = previous.collapsed if previous else default_collapsed(depth)
            states[node.id] = NodeState(
                depth=depth, collapsed=collapsed, reply_count=len(node.replies)
            )
        self._states = states
        self._reply_open &= set(states)

    def __contains__(self, comment_id: object) -> bool:
        return comment_id in self._states

    def node_state(self, comment_id: CommentId) -> Optional[NodeState]:
        """State of a node, None if the node is unknown."""
        return self._states.get(comment_id)

    def state(self, comment_id: CommentId) -> Optional[CollapseState]:
        """Collapse state of a node, None if the node is unknown."""
        node_state = self._states.get(comment_id)
        return node_state.state if node_state else None

    def is_collapsed(self, comment_id: CommentId) -> bool:
        node_state = self._states.get(comment_id)
        return bool(node_state and node_state.collapsed)

    def toggle(self, comment_id: CommentId) -> Optional[CollapseState]:
        """Flip a node that has replies. Descendants keep their own state.

        Returns:
            The node's state afterwards, None if the node is unknown
        """
        node_state = self._states.get(comment_id)
        if node_state is None:
            return None
        if node_state.reply_count > 0:
            node_state.collapsed = not node_state.collapsed
        return node_state.state

    def expand(self, comment_id: CommentId) -> None:
        """Force a node open."""
        node_state = self._states.get(comment_id)
        if node_state is not None:
            node_state.collapsed = False

    def open_reply(self, comment_id: CommentId) -> None:
        """Open the reply box, expanding a collapsed node with replies first."""
        node_state = self._states.get(comment_id)
        if node_state is None:
            return
        if node_state.collapsed and node_state.reply_count > 0:
            node_state.collapsed = False
        self._reply_open.add(comment_id)

    def close_reply(self, comment_id: CommentId) -> None:
        self._reply_open.discard(comment_id)

    def is_reply_open(self, comment_id: CommentId) -> bool:
        return comment_id in self._reply_open

    def visible(self, roots: Sequence[CommentNode]) -> list[VisibleNode]:
        """Nodes to render, in display order."""
        rows: list[VisibleNode] = []
        stack: list[tuple[CommentNode, int]] = [(root, 0) for root in reversed(roots)]
        while stack:
            node, depth = stack.pop()
            node_state = self._states.get(node.id)
            collapsed = (
                node_state.collapsed if node_state else default_collapsed(depth)
            )
            rows.append(
                VisibleNode(
                    node=node,
                    depth=depth,
                    indent=display_indent(depth),
                    collapsed=collapsed,
                    hidden_replies=len(node.replies) if collapsed else 0,
                    reply_open=node.id in self._reply_open,
                )
            )
            if not collapsed:
                stack.extend((reply, depth + 1) for reply in reversed(node.replies))
        return rows


def relative_time(moment: datetime, now: Optional[datetime] = None) -> str:
    """Human readable age, e.g. "3 hours ago".

    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - moment).total_seconds())
    if seconds < 60:
        return "just now"

    minutes = seconds // 60
    if minutes < 60:
        return _ago(minutes, "minute")

    hours = minutes // 60
    if hours < 24:
        return _ago(hours, "hour")

    days = hours // 24
    if days < 7:
        return _ago(days, "day")

    weeks = days // 7
    if weeks < 4:
        return _ago(weeks, "week")

    months = max(days // 30, 1)
    if months < 12:
        return _ago(months, "month")

    return _ago(max(days // 365, 1), "year")


def _ago(amount: int, unit: str) -> str:
    return f"{amount} {unit}{'' if amount == 1 else 's'} ago"
