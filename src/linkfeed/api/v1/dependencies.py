"""Shared API dependencies for authentication and common functionality."""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from linkfeed.core.errors import InvalidToken, TokenExpired, Unauthenticated
from linkfeed.core.security import decode_access_token
from linkfeed.db.session import get_db
from linkfeed.models import User
from linkfeed.services import user_service

logger = logging.getLogger(__name__)

# Missing or non-Bearer Authorization headers yield None instead of FastAPI's own error.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Resolve the user behind the request's bearer token.

    Args:
        credentials: Parsed ``Authorization: Bearer <token>`` header, if any
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        Unauthenticated: No token, a token that fails verification or has
            expired, or a token whose subject no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Not authorized, no token")

    try:
        payload = decode_access_token(credentials.credentials)
    except TokenExpired as err:
        logger.info("Rejected expired token: %s", err)
        raise Unauthenticated("Not authorized, token failed") from err
    except InvalidToken as err:
        logger.info("Rejected invalid token: %s", err)
        raise Unauthenticated("Not authorized, token failed") from err

    user = user_service.get_user(db, payload.user_id)
    if user is None:
        logger.warning("Token subject %s does not exist", payload.user_id)
        raise Unauthenticated("User not found")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
