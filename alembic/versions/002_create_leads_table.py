"""Create leads table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 00:05:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "leads",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("business_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("service_interest", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="new"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        # One lead per phone number and business
        sa.UniqueConstraint("business_id", "phone", name="uq_leads_business_phone"),
    )
    op.create_index(op.f("ix_leads_business_id"), "leads", ["business_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_leads_business_id"), table_name="leads")
    op.drop_table("leads")
