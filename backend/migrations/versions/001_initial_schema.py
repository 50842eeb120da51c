"""Initial schema: users, tokens, workouts, workout_entries.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

- users: username is unique
- tokens: SHA-256 digest as primary key; rows go with their user
- workouts: optional owner; rows go with their user
- workout_entries: ON DELETE CASCADE from workouts. The workout store
  issues no explicit child delete, so this clause is what removes entries
  when a workout is deleted.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False, server_default=""),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    op.create_table(
        "tokens",
        sa.Column("hash", sa.String(64), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("expiry", sa.DateTime(timezone=True), nullable=False),
        sa.Column("scope", sa.String(50), nullable=False),
    )
    op.create_index("ix_tokens_user_id_scope", "tokens", ["user_id", "scope"])

    op.create_table(
        "workouts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("calories_burned", sa.Integer(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint("duration_minutes >= 0", name="ck_workouts_duration"),
        sa.CheckConstraint("calories_burned >= 0", name="ck_workouts_calories"),
    )
    op.create_index("ix_workouts_user_id", "workouts", ["user_id"])

    op.create_table(
        "workout_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "workout_id",
            sa.Integer(),
            sa.ForeignKey("workouts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("exercise_name", sa.String(255), nullable=False),
        sa.Column("sets", sa.Integer(), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("order_index", sa.Integer(), nullable=False),
        _timestamp("created_at"),
        sa.CheckConstraint("sets >= 0", name="ck_workout_entries_sets"),
        sa.CheckConstraint(
            "reps IS NULL OR reps >= 0", name="ck_workout_entries_reps"
        ),
        sa.CheckConstraint(
            "duration_seconds IS NULL OR duration_seconds >= 0",
            name="ck_workout_entries_duration",
        ),
        sa.CheckConstraint(
            "weight IS NULL OR weight >= 0", name="ck_workout_entries_weight"
        ),
        sa.CheckConstraint(
            "order_index >= 0", name="ck_workout_entries_order_index"
        ),
    )
    op.create_index(
        "ix_workout_entries_workout_id_order",
        "workout_entries",
        ["workout_id", "order_index"],
    )


def downgrade() -> None:
    op.drop_index("ix_workout_entries_workout_id_order", table_name="workout_entries")
    op.drop_table("workout_entries")
    op.drop_index("ix_workouts_user_id", table_name="workouts")
    op.drop_table("workouts")
    op.drop_index("ix_tokens_user_id_scope", table_name="tokens")
    op.drop_table("tokens")
    op.drop_table("users")
