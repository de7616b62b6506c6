"""Initial MyArc schema: users, journal, shorts and daily arcs.

Revision ID: 20261018_initial_schema
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261018_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("auth_provider", sa.String(length=32), server_default="credentials", nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("image", sa.String(length=1024), nullable=True),
        sa.Column("privacy_pin_hash", sa.String(length=255), nullable=True),
        sa.Column("is_onboarded", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("current_focus", sa.Text(), nullable=True),
        sa.Column("theme_preference", sa.String(length=32), server_default="electric", nullable=False),
        sa.Column("custom_categories", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)

    op.create_table(
        "user_preference",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("key", sa.String(length=128), nullable=False),
        sa.Column("value", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_preference_user_id", "user_preference", ["user_id"])
    op.create_index("ux_user_preference_user_key", "user_preference", ["user_id", "key"], unique=True)

    op.create_table(
        "journal_entry",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_encrypted", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("preview", sa.String(length=255), server_default="", nullable=False),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("sentiment", sa.String(length=16), nullable=True),
        sa.Column("embedding", sa.JSON(), nullable=True),
        sa.Column("ai_analysis", sa.JSON(), nullable=True),
        sa.Column("analyzed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_journal_entry_user_id", "journal_entry", ["user_id"])
    op.create_index("ix_journal_entry_user_created_at", "journal_entry", ["user_id", "created_at"])

    op.create_table(
        "shorts_short",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=128), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("source", sa.String(length=16), server_default="user", nullable=False),
        sa.Column("status", sa.String(length=16), server_default="active", nullable=False),
        sa.Column("source_entry_id", sa.Integer(), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.ForeignKeyConstraint(["source_entry_id"], ["journal_entry.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_shorts_short_user_id", "shorts_short", ["user_id"])
    op.create_index("ix_shorts_short_source_entry_id", "shorts_short", ["source_entry_id"])
    op.create_index("ix_shorts_short_user_category", "shorts_short", ["user_id", "category"])
    op.create_index("ix_shorts_short_user_created_at", "shorts_short", ["user_id", "created_at"])

    op.create_table(
        "shorts_milestone",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("short_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), server_default="0", nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("is_completed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["short_id"], ["shorts_short.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_shorts_milestone_short_id", "shorts_milestone", ["short_id"])

    op.create_table(
        "arcs_daily_arc",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("arc_date", sa.Date(), nullable=False),
        sa.Column("suggested_action", sa.Text(), nullable=True),
        sa.Column("momentum_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("completed_actions", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "arc_date", name="ux_arcs_daily_arc_user_date"),
    )
    op.create_index("ix_arcs_daily_arc_user_id", "arcs_daily_arc", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_arcs_daily_arc_user_id", table_name="arcs_daily_arc")
    op.drop_table("arcs_daily_arc")
    op.drop_index("ix_shorts_milestone_short_id", table_name="shorts_milestone")
    op.drop_table("shorts_milestone")
    op.drop_index("ix_shorts_short_user_created_at", table_name="shorts_short")
    op.drop_index("ix_shorts_short_user_category", table_name="shorts_short")
    op.drop_index("ix_shorts_short_source_entry_id", table_name="shorts_short")
    op.drop_index("ix_shorts_short_user_id", table_name="shorts_short")
    op.drop_table("shorts_short")
    op.drop_index("ix_journal_entry_user_created_at", table_name="journal_entry")
    op.drop_index("ix_journal_entry_user_id", table_name="journal_entry")
    op.drop_table("journal_entry")
    op.drop_index("ux_user_preference_user_key", table_name="user_preference")
    op.drop_index("ix_user_preference_user_id", table_name="user_preference")
    op.drop_table("user_preference")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
