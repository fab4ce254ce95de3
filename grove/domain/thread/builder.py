"""Build a reply tree from flat comment records.

Records come from storage ordered ascending by ``created_at``; the order
of roots and of every ``replies`` list mirrors that input order.
"""

from collections.abc import Iterator, Sequence
from typing import Optional

from grove.domain.model.comment import Comment
from grove.domain.thread.node import CommentNode
from grove.domain.value import CommentId


def build_tree(records: Sequence[Comment]) -> list[CommentNode]:
    """Nest flat comment records into a list of root nodes.

    A record whose parent is missing from ``records``, or belongs to
    another post, is kept as a root rather than dropped. So is a record
    that points at itself or whose attachment would close a cycle, so
    every record ends up reachable exactly once. Repeated ids keep their
    first occurrence.

    Args:
        records: Comments of one post, oldest first

    Returns:
        Root nodes with replies populated recursively
    """
    nodes: dict[CommentId, CommentNode] = {}
    for record in records:
        if record.id not in nodes:
            nodes[record.id] = CommentNode.from_record(record)

    roots: list[CommentNode] = []
    attached_to: dict[CommentId, CommentId] = {}
    placed: set[CommentId] = set()

    for record in records:
        if record.id in placed:
            continue
        placed.add(record.id)

        node = nodes[record.id]
        parent = nodes.get(record.parent_id) if record.parent_id is not None else None
        if parent is not None and parent.post_id != record.post_id:
            parent = None

        if parent is None or _closes_cycle(record.id, parent.id, attached_to):
            roots.append(node)
        else:
            # Nodes are still private to this function
            parent.replies.append(node)
            attached_to[record.id] = parent.id

    return roots


def _closes_cycle(
    child_id: CommentId,
    parent_id: CommentId,
    attached_to: dict[CommentId, CommentId],
) -> bool:
    """Whether ``child_id`` is ``parent_id`` or one of its attached ancestors."""
    ancestor: Optional[CommentId] = parent_id
    while ancestor is not None:
        if ancestor == child_id:
            return True
        ancestor = attached_to.get(ancestor)
    return False


def find_orphans(records: Sequence[Comment]) -> list[Comment]:
    """Records whose parent is not part of ``records``."""
    ids = {record.id for record in records}
    return [
        record
        for record in records
        if record.parent_id is not None and record.parent_id not in ids
    ]


def iter_tree(roots: Sequence[CommentNode]) -> Iterator[tuple[CommentNode, int]]:
    """Walk the tree depth-first in display order.

    Uses an explicit stack, so arbitrarily deep threads are fine.

    Yields:
        (node, depth) pairs, depth 0 for roots
    """
    stack: list[tuple[CommentNode, int]] = [(root, 0) for root in reversed(roots)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((reply, depth + 1) for reply in reversed(node.replies))


def count_nodes(roots: Sequence[CommentNode]) -> int:
    """Total number of nodes, nested replies included."""
    return sum(1 for _ in iter_tree(roots))


def find_node(
    roots: Sequence[CommentNode], comment_id: CommentId
) -> Optional[CommentNode]:
    """Find a node by id at any depth."""
    for node, _ in iter_tree(roots):
        if node.id == comment_id:
            return node
    return None
