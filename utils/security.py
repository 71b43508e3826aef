"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT creation/verification via PyJWT
- opaque refresh token generation
"""
from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHash, VerificationError

from utils.exceptions import InvalidOrExpiredAccessToken

logger = logging.getLogger(__name__)

JWT_ISSUER = "chirpy"
JWT_ALGORITHM = "HS256"
REFRESH_TOKEN_BYTES = 32


def build_password_hasher(time_cost: int | None = None, memory_cost: int | None = None) -> PasswordHasher:
    """Argon2id hasher with an explicit work factor; unset values keep argon2's defaults."""
    options = {}
    if time_cost is not None:
        options["time_cost"] = time_cost
    if memory_cost is not None:
        options["memory_cost"] = memory_cost
    return PasswordHasher(**options)


def hash_password(password: str, hasher: PasswordHasher) -> str:
    """Hash a plaintext password using Argon2.

    A hashing failure must never let the caller continue with an unhashed
    credential, so it is logged and re-raised.
    """
    try:
        return hasher.hash(password)
    except HashingError:
        logger.critical("password hashing failed")
        raise


def verify_password(password: str, password_hash: str, hasher: PasswordHasher) -> bool:
    """Verify a plaintext password against an Argon2 hash."""
    try:
        return hasher.verify(password_hash, password)
    except (VerificationError, InvalidHash):
        return False


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID)."""
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def make_jwt(user_id, secret: str, expires_in: timedelta, now: datetime | None = None) -> str:
    """Sign an access token asserting `user_id` for `expires_in`."""
    issued_at = now or _now()
    payload = {
        "iss": JWT_ISSUER,
        "sub": str(user_id),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + expires_in).timestamp()),
        "jti": generate_jti(),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def validate_jwt(token: str, secret: str) -> uuid.UUID:
    """
    Decode and validate an access token, returning its subject as a UUID.
    Bad signature, malformed token, expiry and unparsable subject all raise
    the same InvalidOrExpiredAccessToken.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            issuer=JWT_ISSUER,
            options={"require": ["exp", "iat", "iss", "sub"]},
        )
        return uuid.UUID(decoded["sub"])
    except jwt.InvalidTokenError as exc:
        logger.debug("rejected access token: %s", exc)
    except (ValueError, TypeError, AttributeError) as exc:
        logger.debug("rejected access token subject: %s", exc)
    raise InvalidOrExpiredAccessToken()


def make_refresh_token() -> str:
    """32 random bytes from a CSPRNG, hex encoded (64 chars)."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)
