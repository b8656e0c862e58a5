"""Create users and exercises tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Initial schema: `users` and `exercises`.
How:   Portable column types (sa.Uuid, timezone-aware DateTime) so the same
       migration runs on PostgreSQL and SQLite.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False, comment="System-generated identifier"),
        sa.Column(
            "username",
            sa.String(255),
            nullable=True,
            comment="Display name; not required, not unique",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "description",
            sa.String(1024),
            nullable=False,
            comment="What was done, e.g. 'run'",
        ),
        sa.Column("duration", sa.Float(), nullable=False, comment="Duration in minutes"),
        sa.Column(
            "date",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When the exercise happened (UTC)",
        ),
        # No ForeignKeyConstraint: the owner reference is not enforced
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=False,
            comment="Owning user's id (not enforced by a foreign key)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Serves the log query: one user's exercises, by date range, ordered by date
    op.create_index("idx_exercises_user_date", "exercises", ["user_id", "date"])


def downgrade() -> None:
    op.drop_index("idx_exercises_user_date", table_name="exercises")
    op.drop_table("exercises")
    op.drop_table("users")
