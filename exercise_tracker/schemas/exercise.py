"""
Exercise Tracker — Exercise Schemas and Response Shaping
==========================================================

What:  Response models for exercise creation and log retrieval, plus the
       date rendering shared by both.
Who:   Built by ExerciseService; serialized by the routes.

Duration:
    Stored as a float. Whole values are serialized as JSON integers (30, not
    30.0); fractional values stay fractional (30.5).

Date format:
    Dates are rendered as "<weekday> <month> <day> <year>" with a zero-padded
    day and no time of day, e.g. "Sun Jan 15 2023" or "Thu Jan 05 2023".
"""

import uuid
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_serializer

DATE_STRING_FORMAT = "%a %b %d %Y"


def to_date_string(value: datetime) -> str:
    """Render a stored exercise date as e.g. 'Sun Jan 15 2023'."""
    return value.strftime(DATE_STRING_FORMAT)


def minutes_for_json(value: float) -> Union[int, float]:
    """30.0 → 30, 30.5 → 30.5."""
    return int(value) if float(value).is_integer() else value


class ExerciseResponse(BaseModel):
    """
    Returned by POST /api/users/{_id}/exercises.

    The owner's fields merged with the new exercise's fields. The exercise's
    own id is not part of the contract.
    """

    id: uuid.UUID = Field(serialization_alias="_id", description="Owning user's identifier")
    username: Optional[str] = Field(default=None, description="Owning user's display name")
    description: str
    duration: float = Field(description="Duration in minutes")
    date: str = Field(description="Exercise date, e.g. 'Sun Jan 15 2023'")

    @field_serializer("duration")
    def serialize_duration(self, value: float) -> Union[int, float]:
        return minutes_for_json(value)


class LogEntry(BaseModel):
    """One element of the `log` array."""

    description: str
    duration: float
    date: str

    @field_serializer("duration")
    def serialize_duration(self, value: float) -> Union[int, float]:
        return minutes_for_json(value)


class LogResponse(BaseModel):
    """
    Returned by GET /api/users/{_id}/logs.

    `count` is the length of `log` after date filtering and limiting, not the
    user's total number of exercises.
    """

    id: uuid.UUID = Field(serialization_alias="_id", description="User identifier")
    username: Optional[str] = None
    count: int = Field(description="Number of entries in `log`")
    log: List[LogEntry] = Field(default_factory=list)
