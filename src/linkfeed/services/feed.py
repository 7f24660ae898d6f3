"""Read-only feed queries. Posts are public, so no identity is needed."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import desc
from sqlalchemy.orm import Session

from linkfeed.models.post import Post


def list_all(db: Session) -> Sequence[Post]:
    """Return every post, newest first."""
    return db.query(Post).order_by(desc(Post.created_at)).all()


def list_by_author(db: Session, user_id: str) -> Sequence[Post]:
    """Return the posts authored by ``user_id``, newest first."""
    return (
        db.query(Post)
        .filter(Post.author_id == user_id)
        .order_by(desc(Post.created_at))
        .all()
    )
