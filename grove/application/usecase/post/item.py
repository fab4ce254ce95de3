"""Post shape shared by the post use cases."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from grove.domain.model import Post
from grove.domain.value import ForestId, PostId, UserId


class PostItem(BaseModel):
    """Post record with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    author_id: str
    author_name: str
    content: str
    forest_id: str | None = None
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_post(cls, post: Post) -> "PostItem":
        return cls(
            id=str(post.id),
            author_id=str(post.author_id),
            author_name=post.author_name,
            content=post.content,
            forest_id=str(post.forest_id) if post.forest_id else None,
            image_url=post.image_url,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    def to_post(self) -> Post:
        return Post(
            id=PostId(self.id),
            author_id=UserId(self.author_id),
            author_name=self.author_name,
            content=self.content,
            forest_id=ForestId(self.forest_id) if self.forest_id else None,
            image_url=self.image_url,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
