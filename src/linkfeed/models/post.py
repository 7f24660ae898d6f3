# src/linkfeed/models/post.py
"""SQLAlchemy models for posts, likes and comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkfeed.db.session import Base
from linkfeed.db.time import utcnow

from .user import new_id

POST_CONTENT_MAX_LENGTH = 500
COMMENT_TEXT_MAX_LENGTH = 300


class Post(Base):
    """Short text post with an optional image.

    ``author_name`` is a snapshot of the author's name at creation time and
    is never refreshed. Likes and comments live in their own tables so each
    one is written as a single row.
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    author_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id"),
        index=True,
        nullable=False,
    )
    author_name: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(String(POST_CONTENT_MAX_LENGTH), nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    likes: Mapped[list[PostLike]] = relationship(
        "PostLike",
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
        lazy="selectin",
    )

    @property
    def liked_by(self) -> list[str]:
        """Return the ids of users who currently like the post."""
        return [like.user_id for like in self.likes]

    @property
    def like_count(self) -> int:
        """Return the number of likes; always ``len(liked_by)``."""
        return len(self.likes)


class PostLike(Base):
    """Membership row: ``user_id`` likes ``post_id``.

    The composite primary key makes a second like by the same user
    impossible at the database level.
    """

    __tablename__ = "post_likes"

    post_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    post: Mapped[Post] = relationship("Post", back_populates="likes")


class Comment(Base):
    """A comment embedded in exactly one post."""

    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    post_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("posts.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    author_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), nullable=False)
    author_name: Mapped[str] = mapped_column(Text, nullable=False)
    text: Mapped[str] = mapped_column(String(COMMENT_TEXT_MAX_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    post: Mapped[Post] = relationship("Post", back_populates="comments")
