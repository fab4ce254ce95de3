"""Strongly typed identifiers for Grove domain entities.

Identifiers are opaque strings. NewType keeps post, comment and user ids
from being mixed up at call sites.
"""

from typing import NewType

UserId = NewType("UserId", str)
PostId = NewType("PostId", str)
CommentId = NewType("CommentId", str)
ForestId = NewType("ForestId", str)
