"""Password hashing and bearer token helpers."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from linkfeed.core.errors import InvalidToken, TokenExpired
from linkfeed.core.settings import settings

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class TokenPayload:
    """Decoded contents of a verified access token."""

    user_id: str
    expires_at: datetime


def hash_password(raw_password: str) -> str:
    """Return a salted bcrypt hash of ``raw_password``."""
    digest = bcrypt.hashpw(raw_password.encode("utf-8"), bcrypt.gensalt())
    return digest.decode("utf-8")


def check_password(raw_password: str, password_hash: str) -> bool:
    """Compare a candidate password against a stored bcrypt hash."""
    candidate = raw_password.encode("utf-8")
    if len(candidate) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def create_access_token(user_id: str, *, now: datetime | None = None) -> str:
    """Issue a signed JWT whose subject is ``user_id``.

    Args:
        user_id: Identifier of the authenticated user.
        now: Issuance instant; defaults to the current UTC time.

    Returns:
        Encoded token, valid for ``ACCESS_TOKEN_EXPIRE_MINUTES`` (30 days by default).
    """
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, object] = {
        "sub": user_id,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str, *, now: datetime | None = None) -> TokenPayload:
    """Verify ``token`` and return its payload.

    Signature and structure are checked by python-jose; expiry is checked here
    against ``now`` so callers can evaluate a token at any instant.

    Raises:
        InvalidToken: Malformed token, bad signature or missing claims.
        TokenExpired: The token verified but ``now`` is past its expiry.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False},
        )
    except JWTError as err:
        raise InvalidToken(str(err)) from err

    subject = payload.get("sub")
    exp = payload.get("exp")
    if not isinstance(subject, str) or not subject or not isinstance(exp, int | float):
        raise InvalidToken("Token is missing required claims")

    expires_at = datetime.fromtimestamp(exp, UTC)
    current = now or datetime.now(UTC)
    if current >= expires_at:
        raise TokenExpired(f"Token expired at {expires_at.isoformat()}")
    return TokenPayload(user_id=subject, expires_at=expires_at)
