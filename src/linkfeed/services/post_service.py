"""Post aggregate: creation and ownership-gated mutation of posts.

Every mutation looks the post up first (``NotFound``), then checks the
actor (``Forbidden``), then validates the payload (``ValidationError``).
Likes and comments are written as individual rows, so two users acting on
the same post at once never overwrite each other's changes.
"""
from __future__ import annotations

import logging

from sqlalchemy import delete, insert, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from linkfeed.core.errors import Forbidden, NotFound, ValidationError
from linkfeed.db.time import utcnow
from linkfeed.models.post import (
    COMMENT_TEXT_MAX_LENGTH,
    POST_CONTENT_MAX_LENGTH,
    Comment,
    Post,
    PostLike,
)
from linkfeed.models.user import User
from linkfeed.services import uploads

__all__ = [
    "validate_content",
    "validate_comment_text",
    "get_post",
    "create_post",
    "edit_post",
    "delete_post",
    "toggle_like",
    "add_comment",
    "remove_comment",
]

logger = logging.getLogger(__name__)


def _clean_text(value: object, *, label: str, max_length: int) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{label} is required")
    if len(text) > max_length:
        raise ValidationError(f"{label} cannot exceed {max_length} characters")
    return text


def validate_content(content: object) -> str:
    """Return trimmed post content, or raise ``ValidationError``."""
    return _clean_text(content, label="Post content", max_length=POST_CONTENT_MAX_LENGTH)


def validate_comment_text(text: object) -> str:
    """Return trimmed comment text, or raise ``ValidationError``."""
    return _clean_text(text, label="Comment text", max_length=COMMENT_TEXT_MAX_LENGTH)


def get_post(db: Session, post_id: str) -> Post:
    """Return the post with ``post_id`` or raise ``NotFound``."""
    post = db.query(Post).filter(Post.id == post_id).first()
    if post is None:
        raise NotFound("Post not found")
    return post


def _touch(db: Session, post_id: str) -> None:
    db.execute(update(Post).where(Post.id == post_id).values(updated_at=utcnow()))


def create_post(
    db: Session,
    *,
    author: User,
    content: str,
    image_url: str | None = None,
) -> Post:
    """Create a post owned by ``author`` with no likes and no comments."""
    post = Post(
        author_id=author.id,
        author_name=author.name,
        content=validate_content(content),
        image_url=image_url,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s", author.id, post.id)
    return post


def edit_post(db: Session, post_id: str, actor_id: str, content: object) -> Post:
    """Replace a post's content. Only the author may edit."""
    post = get_post(db, post_id)
    if post.author_id != actor_id:
        raise Forbidden("Not authorized to edit this post")

    post.content = validate_content(content)
    post.updated_at = utcnow()
    db.commit()
    db.refresh(post)
    logger.info("User %s edited post %s", actor_id, post_id)
    return post


def delete_post(db: Session, post_id: str, actor_id: str) -> None:
    """Permanently remove a post with its likes and comments. Author only."""
    post = get_post(db, post_id)
    if post.author_id != actor_id:
        raise Forbidden("Not authorized to delete this post")

    image_url = post.image_url
    db.delete(post)
    db.commit()
    uploads.remove_image(image_url)
    logger.info("User %s deleted post %s", actor_id, post_id)


def toggle_like(db: Session, post_id: str, actor_id: str) -> Post:
    """Flip ``actor_id``'s like on a post between liked and not liked.

    Unliking deletes the membership row; liking inserts it. The like count
    is derived from those rows, so it never drifts from ``liked_by``.
    """
    post = get_post(db, post_id)

    removed = db.execute(
        delete(PostLike).where(
            PostLike.post_id == post.id,
            PostLike.user_id == actor_id,
        )
    ).rowcount
    if not removed:
        try:
            with db.begin_nested():
                db.execute(
                    insert(PostLike).values(
                        post_id=post.id,
                        user_id=actor_id,
                        created_at=utcnow(),
                    )
                )
        except IntegrityError:
            # Same user liked concurrently; the post is liked either way.
            logger.debug("Duplicate like by %s on %s ignored", actor_id, post.id)

    _touch(db, post.id)
    db.commit()
    db.refresh(post)
    return post


def add_comment(db: Session, post_id: str, actor: User, text: object) -> Post:
    """Append a comment by ``actor`` and return the updated post."""
    post = get_post(db, post_id)
    comment = Comment(
        post_id=post.id,
        author_id=actor.id,
        author_name=actor.name,
        text=validate_comment_text(text),
        created_at=utcnow(),
    )
    db.add(comment)
    _touch(db, post.id)
    db.commit()
    db.refresh(post)
    return post


def remove_comment(db: Session, post_id: str, comment_id: str, actor_id: str) -> Post:
    """Delete a comment. Allowed for the comment's author or the post's author."""
    post = get_post(db, post_id)
    comment = (
        db.query(Comment)
        .filter(Comment.id == comment_id, Comment.post_id == post.id)
        .first()
    )
    if comment is None:
        raise NotFound("Comment not found")

    if actor_id not in (comment.author_id, post.author_id):
        raise Forbidden("Not authorized to delete this comment")

    db.execute(delete(Comment).where(Comment.id == comment.id))
    _touch(db, post.id)
    db.commit()
    db.refresh(post)
    logger.info("User %s removed comment %s from post %s", actor_id, comment_id, post_id)
    return post
