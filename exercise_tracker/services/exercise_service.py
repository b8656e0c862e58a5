"""
Exercise Tracker — Exercise Service
=====================================

What:  Store access for exercises: add an exercise to a user, fetch a
       user's filtered exercise log.
Who:   Called by the /api/users/{_id}/exercises and /logs route handlers.

Orchestration:
    add_exercise:  validate id + fields → insert exercise → look up owner
                   → merge owner and exercise into the response
    get_log:       validate id → look up owner → parse from/to/limit
                   → query exercises → shape the log

    Each step is awaited in order; the first exception ends the operation.
    If the owner lookup after an insert finds nothing, NotFoundError is
    raised and the request's session rolls the insert back.

Error Handling Strategy:
    Application exceptions (ValidationError, NotFoundError) propagate
    as-is. Anything else raised while talking to the store is logged with
    its traceback and replaced by a DatabaseError with a fixed message.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import asc, select
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.exceptions import DatabaseError, ExerciseTrackerError
from exercise_tracker.models.exercise import Exercise
from exercise_tracker.schemas.exercise import (
    ExerciseResponse,
    LogEntry,
    LogResponse,
    to_date_string,
)
from exercise_tracker.services.filters import (
    end_of_day_exclusive,
    parse_bound_date,
    parse_duration,
    parse_exercise_date,
    parse_limit,
    parse_user_id,
    require_description,
    start_of_day,
)
from exercise_tracker.services.user_service import user_service

logger = logging.getLogger(__name__)


class ExerciseService:
    """Business logic for exercise records and user logs."""

    async def add_exercise(
        self,
        db: AsyncSession,
        raw_user_id: str,
        description: Optional[str],
        duration: Optional[str],
        date: Optional[str] = None,
    ) -> ExerciseResponse:
        """
        Record an exercise for a user.

        Args:
            db:          Async database session
            raw_user_id: `_id` path parameter, unparsed
            description: required form field
            duration:    required form field, minutes (fractions allowed)
            date:        optional form field (YYYY-MM-DD or ISO datetime);
                         empty or missing means "now"

        Returns:
            ExerciseResponse: owner's `_id`/`username` plus the exercise's
            description, duration and date string.

        Raises:
            ValidationError: malformed id or field (→ 400)
            NotFoundError:   id is well-formed but no such user (→ 404)
            DatabaseError:   store failure (→ 500 "Failed to add exercise")
        """
        user_id = parse_user_id(raw_user_id)
        description = require_description(description)
        minutes = parse_duration(duration)
        when = parse_exercise_date(date) or datetime.now(timezone.utc)

        try:
            exercise = Exercise(
                description=description,
                duration=minutes,
                date=when,
                user_id=user_id,
            )
            db.add(exercise)
            await db.flush()

            user = await user_service.get_user(db, user_id)
            logger.info("Exercise %s added for user %s", exercise.id, user_id)

            return ExerciseResponse(
                id=user.id,
                username=user.username,
                description=exercise.description,
                duration=exercise.duration,
                date=to_date_string(exercise.date),
            )

        except ExerciseTrackerError:
            raise
        except Exception as e:
            logger.error("Database error adding exercise for %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to add exercise",
                context={"user_id": str(user_id), "error_type": type(e).__name__},
            )

    async def get_log(
        self,
        db: AsyncSession,
        raw_user_id: str,
        from_: Optional[str] = None,
        to: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> LogResponse:
        """
        Return a user's exercise log with optional date range and count cap.

        Filters (all optional, applied together):
            from_:  YYYY-MM-DD, keeps exercises on or after that day
            to:     YYYY-MM-DD, keeps exercises on or before that day
                    (the whole day is included)
            limit:  positive integer cap; other values are ignored

        Query plan:
            SELECT ... FROM exercises WHERE user_id = :id
              [AND date >= :from] [AND date < :to_plus_one_day]
            ORDER BY date ASC [LIMIT :limit]
            → served by idx_exercises_user_date

        Raises:
            ValidationError: malformed id, from or to (→ 400)
            NotFoundError:   no such user (→ 404)
            DatabaseError:   store failure (→ 500 "Failed to fetch user logs")
        """
        user_id = parse_user_id(raw_user_id)

        try:
            user = await user_service.get_user(db, user_id)

            query = select(Exercise).where(Exercise.user_id == user_id)

            if from_:
                query = query.where(Exercise.date >= start_of_day(parse_bound_date(from_, "from")))
            if to:
                upper = end_of_day_exclusive(parse_bound_date(to, "to"))
                if upper is not None:
                    query = query.where(Exercise.date < upper)

            query = query.order_by(asc(Exercise.date))

            max_entries = parse_limit(limit)
            if max_entries is not None:
                query = query.limit(max_entries)

            result = await db.execute(query)
            exercises = list(result.scalars().all())

            log = [
                LogEntry(
                    description=exercise.description,
                    duration=exercise.duration,
                    date=to_date_string(exercise.date),
                )
                for exercise in exercises
            ]

            return LogResponse(
                id=user.id,
                username=user.username,
                count=len(log),
                log=log,
            )

        except ExerciseTrackerError:
            raise
        except Exception as e:
            logger.error("Database error fetching log for %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch user logs",
                context={"user_id": str(user_id), "error_type": type(e).__name__},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
exercise_service = ExerciseService()
