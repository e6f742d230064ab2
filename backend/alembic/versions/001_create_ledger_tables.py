"""create ledger tables

Revision ID: 001
Revises: 
Create Date: 2026-10-19 09:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "entry_groups",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=True, index=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("icon", sa.String(50), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "entry_tags",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=True, index=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("color", sa.String(20), nullable=True),
        sa.Column("suggest_id", sa.String(50), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "entries",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=True, index=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("type", sa.Enum("income", "expense", name="entrytype"), nullable=False),
        sa.Column("amount", sa.String(40), nullable=False),
        sa.Column("currency_code", sa.String(3), nullable=False),
        sa.Column("date", sa.Date(), nullable=False, index=True),
        sa.Column("fullfilled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("recurring_id", sa.String(36), nullable=True, index=True),
        sa.Column("group_id", sa.String(36), nullable=True),
        sa.Column("tag_id", sa.String(36), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("idx_entry_recurring_date", "entries", ["recurring_id", "date"])
    op.create_table(
        "recurring_configs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=True, index=True),
        sa.Column("frequency", sa.Enum("week", "month", "year", name="frequency"), nullable=False),
        sa.Column("interval", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("every", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "exclusions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=True, index=True),
        sa.Column("recurring_id", sa.String(36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("reason", sa.Enum("deletion", "modification", name="exclusionreason"), nullable=False),
        sa.Column("modified_entry_id", sa.String(36), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("idx_exclusion_recurring_date", "exclusions", ["recurring_id", "date"])


def downgrade() -> None:
    op.drop_index("idx_exclusion_recurring_date", table_name="exclusions")
    op.drop_table("exclusions")
    op.drop_table("recurring_configs")
    op.drop_index("idx_entry_recurring_date", table_name="entries")
    op.drop_table("entries")
    op.drop_table("entry_tags")
    op.drop_table("entry_groups")
