"""
Exercise Tracker — ORM Models
===============================

Importing this package registers every table with `Base.metadata`
(used by Alembic autogenerate and by `Database.create_all`).
"""

from exercise_tracker.models.exercise import Exercise
from exercise_tracker.models.user import User

__all__ = ["Exercise", "User"]
