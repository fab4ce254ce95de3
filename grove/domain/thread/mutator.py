"""Local edits to an already built comment tree.

Every function returns a new list of roots and leaves its input intact.
Nodes off the changed path are reused as-is, so callers can compare
subtrees by identity. A target id that is not in the tree turns the edit
into a no-op instead of an error.

Trees are rebuilt with an explicit stack, so thread depth is not bounded
by the interpreter's recursion limit.
"""

from collections.abc import Callable, Iterator, Sequence
from datetime import datetime
from typing import Optional

from grove.domain.thread.builder import find_node
from grove.domain.thread.node import CommentNode
from grove.domain.value import CommentId

# (original node, its pending replies, rebuilt replies so far)
_Frame = tuple[Optional[CommentNode], Iterator[CommentNode], list[CommentNode]]


def remove_node(
    roots: Sequence[CommentNode], target_id: CommentId
) -> list[CommentNode]:
    """Drop every node with ``target_id`` together with its whole subtree."""
    return _rebuild(roots, lambda node: node.id == target_id, drop=True)


def insert_reply(
    roots: Sequence[CommentNode],
    parent_id: Optional[CommentId],
    new_node: CommentNode,
) -> list[CommentNode]:
    """Append ``new_node`` below ``parent_id``, or as a root when it is None.

    The tree is returned unchanged when the parent cannot be found.
    """
    if parent_id is None:
        return [*roots, new_node]

    parent = find_node(roots, parent_id)
    if parent is None:
        return list(roots)

    def append(node: CommentNode) -> CommentNode:
        return node.model_copy(update={"replies": [*node.replies, new_node]})

    return _rebuild(roots, lambda node: node is parent, apply=append)


def mark_edited(
    roots: Sequence[CommentNode],
    target_id: CommentId,
    new_content: str,
    updated_at: Optional[datetime] = None,
) -> list[CommentNode]:
    """Replace the content of ``target_id``.

    ``updated_at`` is only touched when the server supplied one.
    """

    def edit(node: CommentNode) -> CommentNode:
        update: dict = {"content": new_content}
        if updated_at is not None:
            update["updated_at"] = updated_at
        return node.model_copy(update=update)

    return _rebuild(roots, lambda node: node.id == target_id, apply=edit)


def _rebuild(
    roots: Sequence[CommentNode],
    match: Callable[[CommentNode], bool],
    apply: Optional[Callable[[CommentNode], CommentNode]] = None,
    drop: bool = False,
) -> list[CommentNode]:
    """Rebuild the tree bottom-up, editing or dropping matching nodes.

    A node is copied only when it matches or one of its replies changed.

    Args:
        roots: Tree to edit
        match: Selects the nodes to change, called with the original node
        apply: Replacement for a matching node, given its rebuilt form
        drop: Leave matching nodes and their subtrees out instead

    Returns:
        The new roots
    """
    rebuilt_roots: list[CommentNode] = []
    frames: list[_Frame] = [(None, iter(roots), rebuilt_roots)]

    while frames:
        node, pending, rebuilt = frames[-1]

        child = next(pending, None)
        if child is not None:
            if drop and match(child):
                continue
            frames.append((child, iter(child.replies), []))
            continue

        frames.pop()
        if node is None:
            break

        current = node
        if not _unchanged(rebuilt, node.replies):
            current = node.model_copy(update={"replies": rebuilt})
        if apply is not None and match(node):
            current = apply(current)
        frames[-1][2].append(current)

    return rebuilt_roots


def _unchanged(new: Sequence[CommentNode], old: Sequence[CommentNode]) -> bool:
    return len(new) == len(old) and all(a is b for a, b in zip(new, old))
