# src/linkfeed/models/__init__.py
"""SQLAlchemy models for the LinkFeed application."""

from .post import Comment, Post, PostLike
from .user import User

__all__ = [
    "Comment",
    "Post",
    "PostLike",
    "User",
]
