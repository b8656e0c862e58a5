"""
Exercise Tracker — User and Exercise Route Handlers
=====================================================

What:  The four /api endpoints.
How:   Extract form/query/path values, delegate to the services, return
       response models. All error statuses come from the global exception
       handlers in main.py.

Endpoints:
    GET  /api/users                  list users
    POST /api/users                  create user (form: username, read raw)
    POST /api/users/{_id}/exercises  add exercise (form: description, duration, date)
    GET  /api/users/{_id}/logs       exercise log (query: from, to, limit)

Why raw strings for `_id`, `duration` and `limit`:
    Typed FastAPI parameters would answer malformed values with a 422.
    The contract wants 400 for a malformed id, and a lenient "ignore it"
    for a malformed limit, so the services parse these themselves.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Path, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.database import get_db_session
from exercise_tracker.exceptions import ValidationError
from exercise_tracker.schemas.common import ErrorResponse
from exercise_tracker.schemas.exercise import ExerciseResponse, LogResponse
from exercise_tracker.schemas.user import UserResponse
from exercise_tracker.services.exercise_service import exercise_service
from exercise_tracker.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


@router.get(
    "/users",
    response_model=List[UserResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all users",
)
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await user_service.list_users(db)


@router.post(
    "/users",
    response_model=UserResponse,
    responses={
        400: {"description": "username sent as a file", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a user",
    description=(
        "Form field `username` (optional, not unique) is stored exactly as sent; "
        "an empty value stays an empty string and a missing field is stored as null."
    ),
)
async def create_user(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    # Read the form directly: a Form() parameter would turn "" into None
    form = await request.form()
    username = form.get("username")
    if username is not None and not isinstance(username, str):
        raise ValidationError(message="username must be a text field", field="username")
    return await user_service.create_user(db, username)


@router.post(
    "/users/{user_id}/exercises",
    response_model=ExerciseResponse,
    responses={
        400: {"description": "Invalid user ID or exercise fields", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Add an exercise to a user's log",
    description=(
        "Records an exercise for the user. `date` is optional (YYYY-MM-DD); "
        "when omitted the current date is used. The response merges the user's "
        "`_id` and `username` with the exercise fields."
    ),
)
async def add_exercise(
    user_id: str = Path(description="User identifier (`_id`)"),
    description: Optional[str] = Form(default=None),
    duration: Optional[str] = Form(default=None, description="Minutes"),
    date: Optional[str] = Form(default=None, description="YYYY-MM-DD; defaults to today"),
    db: AsyncSession = Depends(get_db_session),
) -> ExerciseResponse:
    return await exercise_service.add_exercise(
        db,
        raw_user_id=user_id,
        description=description,
        duration=duration,
        date=date,
    )


@router.get(
    "/users/{user_id}/logs",
    response_model=LogResponse,
    responses={
        400: {"description": "Invalid user ID or date bound", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a user's exercise log",
    description=(
        "Returns the user's exercises, optionally restricted to an inclusive "
        "`from`/`to` date range (YYYY-MM-DD) and capped by `limit`. `count` is "
        "the number of returned entries."
    ),
)
async def get_log(
    user_id: str = Path(description="User identifier (`_id`)"),
    from_: Optional[str] = Query(default=None, alias="from", description="YYYY-MM-DD, inclusive"),
    to: Optional[str] = Query(default=None, description="YYYY-MM-DD, inclusive"),
    limit: Optional[str] = Query(
        default=None,
        description="Maximum number of entries; non-positive or non-numeric values are ignored",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> LogResponse:
    return await exercise_service.get_log(
        db,
        raw_user_id=user_id,
        from_=from_,
        to=to,
        limit=limit,
    )
