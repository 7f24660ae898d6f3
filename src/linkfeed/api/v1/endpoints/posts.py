# src/linkfeed/api/v1/endpoints/posts.py
"""Post, like and comment endpoints for the LinkFeed API."""

from collections.abc import Sequence
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from linkfeed.api.v1.dependencies import CurrentUserDep, SessionDep
from linkfeed.core.settings import settings
from linkfeed.models import Post
from linkfeed.schemas.common import ErrorResponse, MessageResponse
from linkfeed.schemas.post import CommentCreate, PostResponse, PostUpdate
from linkfeed.services import feed, post_service, uploads

router = APIRouter(prefix="/posts", tags=["posts"])

_NOT_FOUND = {404: {"model": ErrorResponse}}
_OWNER_ONLY = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.get("", response_model=list[PostResponse])
def list_posts(db: SessionDep) -> Sequence[Post]:
    """Return the public feed, newest first."""
    return feed.list_all(db)


@router.get("/user/{user_id}", response_model=list[PostResponse])
def list_user_posts(user_id: str, db: SessionDep) -> Sequence[Post]:
    """Return one author's posts, newest first."""
    return feed.list_by_author(db, user_id)


@router.get("/{post_id}", response_model=PostResponse, responses=_NOT_FOUND)
def get_post(post_id: str, db: SessionDep) -> Post:
    """Get a specific post by ID."""
    return post_service.get_post(db, post_id)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_post(
    current_user: CurrentUserDep,
    db: SessionDep,
    content: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> Post:
    """Create a post from a multipart form with an optional ``image`` file.

    Content is validated before the image touches the disk. A stored image
    is removed again if the post cannot be saved.
    """
    cleaned = post_service.validate_content(content)

    image_url: str | None = None
    if image is not None and image.filename:
        # One byte past the limit is enough to reject an oversized file.
        data = image.file.read(settings.max_image_bytes + 1)
        image_url = uploads.store_image(image.filename, data)

    try:
        return post_service.create_post(
            db, author=current_user, content=cleaned, image_url=image_url
        )
    except Exception:
        uploads.remove_image(image_url)
        raise


@router.patch("/{post_id}", response_model=PostResponse, responses=_OWNER_ONLY)
def edit_post(
    post_id: str,
    payload: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Replace the content of one of the caller's posts."""
    return post_service.edit_post(db, post_id, current_user.id, payload.content)


@router.delete("/{post_id}", response_model=MessageResponse, responses=_OWNER_ONLY)
def delete_post(
    post_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Permanently delete one of the caller's posts."""
    post_service.delete_post(db, post_id, current_user.id)
    return MessageResponse(message="Post deleted successfully")


@router.put("/{post_id}/like", response_model=PostResponse, responses=_NOT_FOUND)
def toggle_like(
    post_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Like the post, or unlike it if the caller already likes it."""
    return post_service.toggle_like(db, post_id, current_user.id)


@router.post(
    "/{post_id}/comments",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, **_NOT_FOUND},
)
def add_comment(
    post_id: str,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Append a comment to a post."""
    return post_service.add_comment(db, post_id, current_user, payload.text)


@router.delete(
    "/{post_id}/comments/{comment_id}",
    response_model=PostResponse,
    responses=_OWNER_ONLY,
)
def remove_comment(
    post_id: str,
    comment_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Remove a comment; allowed for its author or the post's author."""
    return post_service.remove_comment(db, post_id, comment_id, current_user.id)
