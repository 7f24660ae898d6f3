"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str = Field(..., description="Human-readable error message.")
    error: str | None = Field(None, description="Diagnostic detail, when available.")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
