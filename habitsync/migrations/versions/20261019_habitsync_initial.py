"""Create user, habit, subscription, tracking and id counter tables.

Revision ID: 20261019_habitsync_initial
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261019_habitsync_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Integer keys are assigned by the application; references carry no foreign keys."""
    op.create_table(
        "core_id_counter",
        sa.Column("kind", sa.String(length=32), nullable=False),
        sa.Column("last_value", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("kind"),
    )

    op.create_table(
        "user",
        sa.Column("user_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("last_sync_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)
    op.create_index("ix_user_username", "user", ["username"], unique=True)

    op.create_table(
        "habits_habit",
        sa.Column("habit_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("emoji", sa.String(length=16), nullable=False),
        sa.Column("color", sa.String(length=16), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column("repeat_frequency", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("habit_id"),
    )

    op.create_table(
        "habits_user_habit",
        sa.Column("user_habit_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("habit_id", sa.Integer(), nullable=False),
        sa.Column("added_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("user_habit_id"),
        sa.UniqueConstraint("user_id", "habit_id", name="ux_habits_user_habit_user_habit"),
    )
    op.create_index("ix_habits_user_habit_user_id", "habits_user_habit", ["user_id"])
    op.create_index("ix_habits_user_habit_habit_id", "habits_user_habit", ["habit_id"])

    op.create_table(
        "habits_tracking",
        sa.Column("tracking_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("user_habit_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("tracking_id"),
        sa.UniqueConstraint("user_habit_id", "date", name="ux_habits_tracking_user_habit_date"),
    )
    op.create_index("ix_habits_tracking_user_habit_id", "habits_tracking", ["user_habit_id"])
    op.create_index("ix_habits_tracking_created_at", "habits_tracking", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_habits_tracking_created_at", table_name="habits_tracking")
    op.drop_index("ix_habits_tracking_user_habit_id", table_name="habits_tracking")
    op.drop_table("habits_tracking")
    op.drop_index("ix_habits_user_habit_habit_id", table_name="habits_user_habit")
    op.drop_index("ix_habits_user_habit_user_id", table_name="habits_user_habit")
    op.drop_table("habits_user_habit")
    op.drop_table("habits_habit")
    op.drop_index("ix_user_username", table_name="user")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
    op.drop_table("core_id_counter")
