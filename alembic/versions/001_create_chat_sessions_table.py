"""Create chat_sessions table

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

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
        "chat_sessions",
        sa.Column("session_id", sa.String(), nullable=False),
        sa.Column("business_id", sa.String(), nullable=False),
        sa.Column("state_json", postgresql.JSON(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_interaction_time", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("session_id"),
    )
    op.create_index(
        op.f("ix_chat_sessions_session_id"), "chat_sessions", ["session_id"], unique=False
    )
    op.create_index(
        op.f("ix_chat_sessions_business_id"), "chat_sessions", ["business_id"], unique=False
    )
    # Used by the idle-session reaper
    op.create_index(
        op.f("ix_chat_sessions_last_interaction_time"),
        "chat_sessions",
        ["last_interaction_time"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_chat_sessions_last_interaction_time"), table_name="chat_sessions")
    op.drop_index(op.f("ix_chat_sessions_business_id"), table_name="chat_sessions")
    op.drop_index(op.f("ix_chat_sessions_session_id"), table_name="chat_sessions")
    op.drop_table("chat_sessions")
