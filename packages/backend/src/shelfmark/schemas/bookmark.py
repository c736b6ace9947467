"""Pydantic schemas for bookmarks.

Separate input schemas (create/update) from the read schema. Unknown
request keys are dropped, so a client can never smuggle in owner_id.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, field_validator


class BookmarkCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None

    model_config = {"extra": "ignore"}


class BookmarkUpdate(BaseModel):
    """Partial update — only fields present in the request body are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None

    model_config = {"extra": "ignore"}


class BookmarkRead(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        # Backends without timestamptz hand back naive datetimes; they're UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
