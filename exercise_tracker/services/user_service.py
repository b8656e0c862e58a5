"""
Exercise Tracker — User Service
=================================

What:  Store access for users: create, list, look up by id.
Who:   Called by the /api/users route handlers and by ExerciseService.

Design Decision:
    UserService is stateless. It receives the request's AsyncSession on
    each call, so tests can hand it a mock or an in-memory SQLite session.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.exceptions import DatabaseError, NotFoundError
from exercise_tracker.models.user import User
from exercise_tracker.schemas.user import UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """Business logic for user records."""

    async def create_user(self, db: AsyncSession, username: Optional[str]) -> UserResponse:
        """
        Insert a new user.

        `username` is stored exactly as given: None stays NULL, "" stays "".
        Names are not required to be unique.

        Raises:
            DatabaseError: insert failed (→ 500 "Failed to add user")
        """
        try:
            user = User(username=username)
            db.add(user)
            await db.flush()  # Assigns the id without committing
            logger.info("User created: %s", user.id)
            return UserResponse.model_validate(user)
        except Exception as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to add user",
                context={"error_type": type(e).__name__},
            )

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        """
        Return every stored user.

        Raises:
            DatabaseError: query failed (→ 500 "Internal Server Error")
        """
        try:
            result = await db.execute(select(User))
            return [UserResponse.model_validate(user) for user in result.scalars().all()]
        except Exception as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Internal Server Error",
                context={"error_type": type(e).__name__},
            )

    async def get_user(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        """
        Fetch a user row by id.

        Store errors propagate unwrapped; the calling operation decides which
        fixed message the resulting DatabaseError carries.

        Raises:
            NotFoundError: no user with this id (→ 404)
        """
        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(resource="User", resource_id=str(user_id))
        return user


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
