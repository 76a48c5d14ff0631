"""Create the custom icons table."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_create_icons"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "icons",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("data", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_icons_slug", "icons", ["slug"], unique=True)
    op.create_index("ix_icons_created_at", "icons", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_icons_created_at", table_name="icons")
    op.drop_index("ix_icons_slug", table_name="icons")
    op.drop_table("icons")
