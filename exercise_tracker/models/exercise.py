"""
Exercise Tracker — Exercise SQLAlchemy Model
==============================================

What:  ORM model for the `exercises` table: one logged exercise of one user.
Who:   Used by ExerciseService for inserts and log queries.

Table Design:
    - user_id: UUID of the owning user. Deliberately no FOREIGN KEY: the
      reference is only format-checked at write time, and an insert for an
      unknown id is rolled back by the service when the owner lookup fails.
    - date: TIMESTAMP WITH TIME ZONE, UTC. Defaults to the insert time.
      Dates sent as YYYY-MM-DD are stored as midnight UTC.
    - duration: minutes as a double; fractional values such as 30.5 are kept.

Index on (user_id, date):
    The log query is always "exercises of one user, optionally within a
    date range, ordered by date", which this index serves directly.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from exercise_tracker.database import Base


class Exercise(Base):
    """
    A single exercise log entry.

    Lifecycle:
        Created by POST /api/users/{_id}/exercises; never mutated or deleted.
        `user_id` is fixed at creation.
    """

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    description: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="What was done, e.g. 'run'",
    )

    duration: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Duration in minutes",
    )

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When the exercise happened (UTC)",
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        comment="Owning user's id (not enforced by a foreign key)",
    )

    __table_args__ = (
        Index("idx_exercises_user_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Exercise(id={self.id}, user_id={self.user_id}, "
            f"description={self.description!r}, date='{self.date}')>"
        )
