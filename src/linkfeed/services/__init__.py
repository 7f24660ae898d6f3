# src/linkfeed/services/__init__.py
"""Business logic services for the LinkFeed application."""

from . import feed, post_service, uploads, user_service

__all__ = [
    "feed",
    "post_service",
    "uploads",
    "user_service",
]
