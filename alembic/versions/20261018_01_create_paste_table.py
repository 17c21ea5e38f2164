"""Create paste metadata table."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261018_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "paste",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("paste_id", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        sa.Column("storage_path", sa.String(length=512), nullable=False),
        sa.Column("content_type", sa.String(length=255), nullable=False),
        sa.Column("hold_seconds", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_paste_paste_id", "paste", ["paste_id"])
    op.create_index("ix_paste_updated_at", "paste", ["updated_at"])


def downgrade() -> None:
    op.drop_index("ix_paste_updated_at", table_name="paste")
    op.drop_index("ix_paste_paste_id", table_name="paste")
    op.drop_table("paste")
