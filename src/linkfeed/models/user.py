# src/linkfeed/models/user.py
"""SQLAlchemy model for registered accounts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkfeed.db.session import Base
from linkfeed.db.time import utcnow


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


class User(Base):
    """An account that can log in and author posts and comments.

    ``email`` is stored lowercased and is the login key. Only a bcrypt hash
    of the password is kept.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
