"""Create consultant_configs table

Revision ID: 002
Revises: 001
Create Date: 2025-10-02 00:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "consultant_configs",
        sa.Column("consultant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("system_instruction", sa.Text(), nullable=False),
        sa.Column("topic_scope", postgresql.JSON(astext_type=sa.Text()), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("consultant_id"),
    )
    op.create_index(
        op.f("ix_consultant_configs_consultant_id"),
        "consultant_configs",
        ["consultant_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_consultant_configs_consultant_id"), table_name="consultant_configs")
    op.drop_table("consultant_configs")
