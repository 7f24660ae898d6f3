"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from linkfeed.db.time import as_utc


class PostUpdate(BaseModel):
    """Schema for editing a post's content."""

    # Any JSON value is accepted here; the service checks ownership before
    # judging the content, so a non-owner never sees a validation error.
    content: Any = Field(None, description="New content, 1-500 characters after trimming")


class CommentCreate(BaseModel):
    """Schema for adding a comment."""

    text: Any = Field(None, description="Comment text, 1-300 characters after trimming")


class CommentResponse(BaseModel):
    """Schema for a comment embedded in a post."""

    id: str
    author_id: str
    author_name: str
    text: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    _utc_created = field_validator("created_at")(as_utc)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    author_id: str
    author_name: str
    content: str
    image_url: str | None = None
    like_count: int
    liked_by: list[str]
    comments: list[CommentResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    _utc_timestamps = field_validator("created_at", "updated_at")(as_utc)
