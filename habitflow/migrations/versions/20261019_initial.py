"""users, categories, habits, completions and outbox

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)

    op.create_table(
        "categories_category",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("description", sa.String(length=200)),
        sa.Column("color", sa.String(length=16), nullable=False, server_default="#3B82F6"),
        sa.Column("icon", sa.String(length=32), nullable=False, server_default="category"),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "habits_habit",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False, index=True),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("categories_category.id"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500)),
        sa.Column("frequency", sa.String(length=16), nullable=False, server_default="daily"),
        sa.Column("priority", sa.String(length=16), nullable=False, server_default="medium"),
        sa.Column("target", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("streak_current", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("streak_longest", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("streak_current >= 0", name="ck_habits_habit_streak_current_nonneg"),
        sa.CheckConstraint(
            "streak_current <= streak_longest", name="ck_habits_habit_streak_le_longest"
        ),
    )
    op.create_index(
        "ix_habits_habit_user_created_at", "habits_habit", ["user_id", "created_at"]
    )
    op.create_index(
        "ix_habits_habit_user_category", "habits_habit", ["user_id", "category_id"]
    )

    op.create_table(
        "habits_habit_completion",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "habit_id",
            sa.Integer(),
            sa.ForeignKey("habits_habit.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("completed_on", sa.Date(), nullable=False),
        sa.Column("value", sa.Float(), nullable=False, server_default="1"),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("habit_id", "completed_on", name="ux_habits_completion_habit_day"),
    )
    op.create_index(
        "ix_habits_completion_habit_completed_on",
        "habits_habit_completion",
        ["habit_id", "completed_on"],
    )

    op.create_table(
        "platform_outbox",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_type", sa.String(length=128), nullable=False, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), index=True),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_platform_outbox_status_created_at", "platform_outbox", ["status", "created_at"]
    )


def downgrade():
    op.drop_index("ix_platform_outbox_status_created_at", table_name="platform_outbox")
    op.drop_table("platform_outbox")
    op.drop_index("ix_habits_completion_habit_completed_on", table_name="habits_habit_completion")
    op.drop_table("habits_habit_completion")
    op.drop_index("ix_habits_habit_user_category", table_name="habits_habit")
    op.drop_index("ix_habits_habit_user_created_at", table_name="habits_habit")
    op.drop_table("habits_habit")
    op.drop_table("categories_category")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
