# src/linkfeed/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ErrorResponse, MessageResponse
from .post import CommentCreate, CommentResponse, PostResponse, PostUpdate
from .user import AuthResponse, LoginRequest, MeResponse, SignupRequest, UserPublic

__all__ = [
    "ErrorResponse", "MessageResponse",
    "CommentCreate", "CommentResponse", "PostResponse", "PostUpdate",
    "AuthResponse", "LoginRequest", "MeResponse", "SignupRequest", "UserPublic",
]
