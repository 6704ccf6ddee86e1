"""Create users and usage_logs tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("subscription_tier", sa.String(50), nullable=False, server_default="free"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "usage_logs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("anon_user_id", sa.String(64), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=False),
        sa.Column("industry", sa.String(100), nullable=False),
        sa.Column("reset_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_usage_logs_user_reset", "usage_logs", ["user_id", "reset_date"])
    op.create_index("ix_usage_logs_anon_user_id", "usage_logs", ["anon_user_id"])
    op.create_index("ix_usage_logs_ip_address", "usage_logs", ["ip_address"])


def downgrade() -> None:
    op.drop_table("usage_logs")
    op.drop_table("users")
