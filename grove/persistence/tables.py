"""SQLAlchemy table definitions for Grove.

They match the schema defined in the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# FORESTS TABLE
# ============================================================================
forests_table = Table(
    "forests",
    metadata,
    Column("id", String(100), primary_key=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column("is_private", Boolean, nullable=False, server_default="false"),
    Column("creator_id", String(100), nullable=False),
    Column("creator_name", String(255), nullable=False),  # Denormalized from token
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_forests_created_at", forests_table.c.created_at.desc())

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", String(100), primary_key=True),
    Column("author_id", String(100), nullable=False),
    Column("author_name", String(255), nullable=False),  # Denormalized from token
    Column("content", Text, nullable=False),
    Column(
        "forest_id",
        String(100),
        ForeignKey("forests.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("image_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("char_length(content) >= 1", name="post_content_not_empty"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_forest_id", posts_table.c.forest_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
# Rows are never removed by the API: deleted_at tombstones a comment and
# its replies keep pointing at it.
comments_table = Table(
    "comments",
    metadata,
    Column("id", String(100), primary_key=True),
    Column(
        "post_id",
        String(100),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "parent_id",
        String(100),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("author_id", String(100), nullable=False),
    Column("author_name", String(255), nullable=False),  # Denormalized from token
    Column("author_avatar", Text, nullable=True),
    Column("content", Text, nullable=False),
    Column("image_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 10000", name="comment_content_length"
    ),
)

Index(
    "idx_comments_post_id_created_at",
    comments_table.c.post_id,
    comments_table.c.created_at,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)
