"""Port to the Grove API as seen by the comment thread."""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from grove.domain.model import Comment, Post
from grove.domain.value import CommentId, PostId, UserId


class Actor(BaseModel):
    """The signed-in user of a thread view."""

    user_id: UserId
    name: str
    avatar: Optional[str] = None


class PostWithComments(BaseModel):
    """A post with its comments, flat and oldest first."""

    post: Post
    comments: list[Comment]


class CommentApi(ABC):
    """Remote operations used by the thread controller.

    Implementations raise ``grove.adapter.error.ApiError`` on failure.
    """

    @abstractmethod
    async def create_comment(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        content: str,
        image_url: Optional[str] = None,
    ) -> Comment:
        """Create a comment and return the stored record."""
        pass

    @abstractmethod
    async def delete_comment(self, comment_id: CommentId) -> None:
        """Soft delete a comment."""
        pass

    @abstractmethod
    async def edit_comment(self, comment_id: CommentId, content: str) -> Comment:
        """Replace a comment's content and return the updated record."""
        pass

    @abstractmethod
    async def fetch_post_with_comments(self, post_id: PostId) -> PostWithComments:
        """Fetch a post and all of its comments."""
        pass
