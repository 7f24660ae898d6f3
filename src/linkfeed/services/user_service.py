"""Credential store: account creation, lookup and password checks."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from linkfeed.core import security
from linkfeed.core.errors import DuplicateEmail, ValidationError
from linkfeed.models.user import User

__all__ = [
    "normalize_email",
    "get_user",
    "find_by_email",
    "create_user",
    "verify_password",
]

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6


def normalize_email(email: str) -> str:
    """Return the canonical (trimmed, lowercased) form of an email."""
    return email.strip().lower()


def get_user(db: Session, user_id: str) -> User | None:
    """Return a single user by primary key."""
    return db.query(User).filter(User.id == user_id).first()


def find_by_email(db: Session, email: str) -> User | None:
    """Return the user registered under ``email``, if any."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def create_user(db: Session, name: str, email: str, raw_password: str) -> User:
    """Persist a new user, storing only a bcrypt hash of the password.

    Raises:
        ValidationError: A field is empty or the password is out of bounds.
        DuplicateEmail: The email is already registered.
    """
    name = (name or "").strip()
    email = normalize_email(email or "")
    if not name or not email or not raw_password:
        raise ValidationError("Please provide all fields")

    password_bytes = len(raw_password.encode("utf-8"))
    if len(raw_password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        )
    if password_bytes > security.BCRYPT_MAX_BYTES:
        raise ValidationError(
            f"Password must be at most {security.BCRYPT_MAX_BYTES} bytes"
        )

    if find_by_email(db, email) is not None:
        raise DuplicateEmail()

    db_user = User(name=name, email=email, password_hash=security.hash_password(raw_password))
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError as err:
        # Another signup for the same email committed first.
        db.rollback()
        raise DuplicateEmail() from err
    db.refresh(db_user)
    logger.info("Registered user %s", db_user.id)
    return db_user


def verify_password(user: User, raw_password: str) -> bool:
    """Check ``raw_password`` against the user's stored hash."""
    return security.check_password(raw_password, user.password_hash)
