"""
Exercise Tracker — User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table.
Who:   Used by UserService and ExerciseService (owner lookup).

Table Design:
    - UUID primary key: system-generated identifier, exposed as `_id`
    - username: free text, nullable, NOT unique. Two users may share a name;
      a user created without a name stores NULL.
    - Rows are never updated or deleted by the API.
"""

import uuid
from typing import Optional

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from exercise_tracker.database import Base


class User(Base):
    """A person whose exercises are tracked."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="System-generated identifier",
    )

    username: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Display name; not required, not unique",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r})>"
