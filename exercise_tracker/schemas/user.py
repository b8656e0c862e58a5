"""
Exercise Tracker — User Schemas
=================================

What:  Response model for user records.
Who:   Returned by GET /api/users (as a list) and POST /api/users.

Field naming:
    The identifier is exposed as `_id`. Pydantic treats leading-underscore
    attribute names as private, so the attribute is `id` and the JSON key
    comes from `serialization_alias`. FastAPI serializes response models
    by alias.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Full user record: `{"_id": ..., "username": ...}`."""

    id: uuid.UUID = Field(serialization_alias="_id", description="User identifier")
    username: Optional[str] = Field(default=None, description="Display name (may be null)")

    model_config = {"from_attributes": True}
