"""
Exercise Tracker — Request Value Parsing
==========================================

What:  Turns raw path/query/form strings into typed values for the services.
Why:   Everything here runs before any store call, so malformed input is
       rejected with a 400 without touching the database.

Rules:
    user id   canonical UUID string (8-4-4-4-12 hex, any case); braces, urn:
              prefixes, bare hex and anything else → ValidationError
    from/to   "YYYY-MM-DD", split on "-" into three integers → calendar date;
              wrong part count, non-numeric part or impossible date
              → ValidationError naming the bound
    limit     positive number caps the log, fractions truncated ("1.5" → 1);
              non-numeric, zero, negative or beyond MAX_LIMIT means
              "no limit" (never an error)
    duration  finite number of minutes, fractions allowed
    date      exercise date form field: ISO 8601 date or datetime; empty
              or missing → None (caller defaults to now)
"""

import math
import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from exercise_tracker.exceptions import ValidationError

# Largest value a signed 64-bit LIMIT accepts
MAX_LIMIT = 2**63 - 1


def parse_user_id(raw: str) -> uuid.UUID:
    """Parse a path `_id`; raises ValidationError("Invalid user ID")."""
    try:
        parsed = uuid.UUID(raw)
    except (TypeError, ValueError, AttributeError):
        parsed = None

    if parsed is None or str(parsed) != raw.lower():
        raise ValidationError(
            message="Invalid user ID",
            field="_id",
            context={"value": raw},
        )
    return parsed


def parse_bound_date(raw: str, field: str) -> date:
    """
    Parse a `from` / `to` query value of the form YYYY-MM-DD.

    Args:
        raw:   Query string value
        field: "from" or "to"; used in the error message
    """
    parts = raw.split("-")
    try:
        if len(parts) != 3:
            raise ValueError(f"expected 3 date components, got {len(parts)}")
        year, month, day = (int(part) for part in parts)
        return date(year, month, day)
    except (ValueError, OverflowError):
        raise ValidationError(
            message=f'Invalid "{field}" date format',
            field=field,
            context={"value": raw},
        )


def parse_limit(raw: Optional[str]) -> Optional[int]:
    """Return a positive limit, or None when the value should be ignored."""
    if raw is None:
        return None
    value = raw.strip()
    try:
        parsed = int(value)
    except ValueError:
        try:
            number = float(value)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        parsed = int(number)
    return parsed if 0 < parsed <= MAX_LIMIT else None


def start_of_day(day: date) -> datetime:
    """Midnight UTC at the start of `day`."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day_exclusive(day: date) -> Optional[datetime]:
    """
    Midnight UTC at the start of the day after `day` (exclusive upper bound).

    Returns None for date.max: no later day exists, so nothing is excluded.
    """
    if day == date.max:
        return None
    return start_of_day(day + timedelta(days=1))


def parse_exercise_date(raw: Optional[str]) -> Optional[datetime]:
    """
    Parse the optional `date` form field of a new exercise.

    "2023-01-15" becomes 2023-01-15 00:00 UTC. Full ISO datetimes are
    accepted too; naive ones are taken as UTC, aware ones converted to UTC.
    """
    if raw is None or not raw.strip():
        return None

    value = raw.strip()
    try:
        if len(value) == 10:
            return start_of_day(date.fromisoformat(value))
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            message="Invalid exercise date format; expected YYYY-MM-DD",
            field="date",
            context={"value": raw},
        )

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_duration(raw: Optional[str]) -> float:
    """Parse the required `duration` form field (minutes, fractions allowed)."""
    if raw is None or not raw.strip():
        raise ValidationError(message="duration is required", field="duration")
    try:
        minutes = float(raw.strip())
    except (ValueError, OverflowError):
        minutes = math.nan

    if not math.isfinite(minutes):
        raise ValidationError(
            message="duration must be a number of minutes",
            field="duration",
            context={"value": raw},
        )
    return minutes


def require_description(raw: Optional[str]) -> str:
    """Ensure the required `description` form field is present and non-blank."""
    if raw is None or not raw.strip():
        raise ValidationError(message="description is required", field="description")
    return raw
