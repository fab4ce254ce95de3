"""add_forests

Add forests (named groups of posts) and point posts.forest_id at them.

Revision ID: 8b2e47c1d093
Revises: 3f1c2a9d7b40
Create Date: 2024-02-03 16:41:07.125904

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8b2e47c1d093"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9d7b40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "forests",
        sa.Column("id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "is_private",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("creator_id", sa.String(100), nullable=False),
        sa.Column("creator_name", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="forests_name_key"),
    )
    op.create_index("idx_forests_created_at", "forests", [sa.text("created_at DESC")])

    # Posts planted in a forest that never existed lose the reference
    op.execute(
        "UPDATE posts SET forest_id = NULL "
        "WHERE forest_id IS NOT NULL "
        "AND forest_id NOT IN (SELECT id FROM forests)"
    )
    op.create_foreign_key(
        "posts_forest_id_fkey",
        "posts",
        "forests",
        ["forest_id"],
        ["id"],
        ondelete="SET NULL",
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_constraint("posts_forest_id_fkey", "posts", type_="foreignkey")
    op.drop_index("idx_forests_created_at", table_name="forests")
    op.drop_table("forests")
