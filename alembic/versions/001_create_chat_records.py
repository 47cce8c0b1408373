"""Create chat_records table

Revision ID: 001
Revises:
Create Date: 2025-10-01 00:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "chat_records",
        sa.Column("session_id", sa.String(), nullable=False),
        sa.Column("consultant_id", sa.String(), nullable=False),
        sa.Column("history", postgresql.JSON(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("session_id"),
    )
    op.create_index(
        op.f("ix_chat_records_session_id"),
        "chat_records",
        ["session_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_chat_records_updated_at"),
        "chat_records",
        ["updated_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_chat_records_updated_at"), table_name="chat_records")
    op.drop_index(op.f("ix_chat_records_session_id"), table_name="chat_records")
    op.drop_table("chat_records")
