"""Typed error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; the handlers registered in
``linkfeed.main`` translate them into ``{"message": ..., "error": ...}``
responses carrying the status code declared on each class.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkfeed.core.settings import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None, *, error: str | None = None) -> None:
        self.message = message or self.default_message
        self.error = error
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing, empty or oversized input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class DuplicateEmail(AppError):
    """An account already exists for the email address."""

    # Conflict semantics, reported as 400 like every other signup rejection.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class Unauthenticated(AppError):
    """No usable bearer token, or the token's subject no longer exists."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized, token failed"


class InvalidCredentials(AppError):
    """Login rejected. Unknown email and wrong password look identical."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Forbidden(AppError):
    """Authenticated, but not allowed to act on the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Internal(AppError):
    """Store or driver failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


class InvalidToken(Exception):
    """Token is malformed, carries a bad signature or lacks a subject."""


class TokenExpired(InvalidToken):
    """Token verified but its expiry has passed."""


def error_body(message: str, error: str | None = None) -> dict[str, str]:
    """Build the shared ``{message, error?}`` response body."""
    body = {"message": message}
    if error is not None:
        body["error"] = error
    return body


def _describe_validation(exc: RequestValidationError) -> tuple[str, str]:
    errors = exc.errors()
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ())[1:]) or 'body'}: {err.get('msg')}"
        for err in errors
    )
    if any(err.get("type") == "missing" or err.get("input") in ("", None) for err in errors):
        return "Please provide all fields", details
    first = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return str(first), details


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.error))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message, details = _describe_validation(exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map store failures and unexpected exceptions onto a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    internal = Internal(error=str(exc) if settings.debug else None)
    return JSONResponse(
        status_code=internal.status_code,
        content=error_body(internal.message, internal.error),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that render every error as ``{message, error?}``."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, unhandled_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
