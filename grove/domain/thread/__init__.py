"""Comment thread core: build, edit and present reply trees."""

from grove.domain.thread.builder import (
    build_tree,
    count_nodes,
    find_node,
    find_orphans,
    iter_tree,
)
from grove.domain.thread.mutator import insert_reply, mark_edited, remove_node
from grove.domain.thread.node import CommentAuthor, CommentNode
from grove.domain.thread.presentation import (
    MAX_INDENT,
    NodeState,
    ThreadPresentation,
    VisibleNode,
    relative_time,
)

__all__ = [
    "CommentAuthor",
    "CommentNode",
    "build_tree",
    "count_nodes",
    "find_node",
    "find_orphans",
    "iter_tree",
    "insert_reply",
    "mark_edited",
    "remove_node",
    "MAX_INDENT",
    "NodeState",
    "ThreadPresentation",
    "VisibleNode",
    "relative_time",
]
