# src/linkfeed/api/v1/endpoints/auth.py
"""Authentication endpoints for the LinkFeed API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from linkfeed.api.v1.dependencies import CurrentUserDep, SessionDep
from linkfeed.core.errors import InvalidCredentials, ValidationError
from linkfeed.core.security import create_access_token
from linkfeed.schemas.common import ErrorResponse
from linkfeed.schemas.user import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    SignupRequest,
    UserPublic,
)
from linkfeed.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/signup",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}},
)
def signup(payload: SignupRequest, db: SessionDep) -> AuthResponse:
    """Create an account and return a bearer token for it."""
    user = user_service.create_user(db, payload.name, payload.email, payload.password)
    return AuthResponse(
        token=create_access_token(user.id),
        user=UserPublic.model_validate(user),
    )


@router.post(
    "/login",
    summary="Exchange email and password for a token",
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Authenticate with email and password."""
    if not payload.email.strip() or not payload.password:
        raise ValidationError("Please provide email and password")

    user = user_service.find_by_email(db, payload.email)
    if user is None or not user_service.verify_password(user, payload.password):
        logger.info("Failed login for %s", user_service.normalize_email(payload.email))
        raise InvalidCredentials()

    return AuthResponse(
        token=create_access_token(user.id),
        user=UserPublic.model_validate(user),
    )


@router.get(
    "/me",
    summary="Return the authenticated user",
    response_model=MeResponse,
    responses={401: {"model": ErrorResponse}},
)
def read_me(current_user: CurrentUserDep) -> MeResponse:
    """Return the user resolved from the bearer token."""
    return MeResponse(user=UserPublic.model_validate(current_user))
