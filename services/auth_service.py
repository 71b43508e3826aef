"""Authentication service: login, refresh-token sessions and request authorization."""

from __future__ import annotations

import hmac
import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Mapping

from sqlalchemy.exc import SQLAlchemyError

from models.base_model import as_utc, utcnow
from models.refresh_token import RefreshToken
from models.refresh_token_store import RefreshTokenStore
from models.user import User
from utils.exceptions import (
    InvalidApiKey,
    InvalidCredentials,
    RecordNotFound,
    SessionNotActive,
    StoreFailure,
)
from utils.headers import get_api_key, get_bearer_token
from utils.security import (
    build_password_hasher,
    hash_password,
    make_jwt,
    make_refresh_token,
    validate_jwt,
    verify_password,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSettings:
    jwt_secret: str
    polka_key: str
    access_token_ttl: timedelta = timedelta(hours=1)
    refresh_token_ttl: timedelta = timedelta(days=60)
    password_time_cost: int | None = None
    password_memory_cost: int | None = None

    @classmethod
    def from_mapping(cls, config: Mapping) -> "AuthSettings":
        """Build settings from a Flask config (or any mapping with the same keys)."""
        return cls(
            jwt_secret=config["JWT_SECRET"],
            polka_key=config["POLKA_KEY"],
            access_token_ttl=config.get("ACCESS_TOKEN_EXPIRES", timedelta(hours=1)),
            refresh_token_ttl=config.get("REFRESH_TOKEN_EXPIRES", timedelta(days=60)),
            password_time_cost=config.get("PASSWORD_HASH_TIME_COST"),
            password_memory_cost=config.get("PASSWORD_HASH_MEMORY_COST"),
        )


class SessionState(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    refresh_token: str


def session_state(record: RefreshToken, now: datetime) -> SessionState:
    """Revoked and expired are both terminal; revoked wins when both apply."""
    if record.revoked_at is not None:
        return SessionState.REVOKED
    if now >= as_utc(record.expires_at):
        return SessionState.EXPIRED
    return SessionState.ACTIVE


class AuthService:
    def __init__(self, settings: AuthSettings, storage, clock: Callable[[], datetime] | None = None):
        self.settings = settings
        self._storage = storage
        self._clock = clock or utcnow
        self.sessions = RefreshTokenStore(storage)
        self._hasher = build_password_hasher(settings.password_time_cost, settings.password_memory_cost)
        # Unknown emails are verified against this so timing matches a real user
        self._dummy_hash = self._hasher.hash(secrets.token_hex(16))

    # ─── Passwords ───────────────────────────────
    def hash_password(self, password: str) -> str:
        return hash_password(password, self._hasher)

    def _find_user_by_email(self, email: str) -> User | None:
        try:
            return self._storage.get_session().query(User).filter(User.email == email).first()
        except SQLAlchemyError as exc:
            self._storage.rollback()
            logger.error("user lookup failed", exc_info=exc)
            raise StoreFailure("could not load user") from exc

    # ─── Access tokens ───────────────────────────
    def issue_access_token(self, user_id) -> str:
        return make_jwt(user_id, self.settings.jwt_secret, self.settings.access_token_ttl)

    def authorize(self, headers: Mapping[str, str]) -> uuid.UUID:
        """Return the user id asserted by the bearer access token."""
        token = get_bearer_token(headers)
        return validate_jwt(token, self.settings.jwt_secret)

    # ─── Login ───────────────────────────────────
    def login(self, email: str, password: str) -> LoginResult:
        user = self._find_user_by_email(email)
        password_hash = user.hashed_password if user else self._dummy_hash
        password_ok = verify_password(password, password_hash, self._hasher)
        if user is None or not password_ok:
            raise InvalidCredentials("unknown email" if user is None else "password mismatch")

        access_token = self.issue_access_token(user.id)
        refresh_token = make_refresh_token()
        self.sessions.create(user.id, refresh_token, self._clock() + self.settings.refresh_token_ttl)
        logger.info("user %s logged in", user.id)
        return LoginResult(user=user, access_token=access_token, refresh_token=refresh_token)

    # ─── Refresh sessions ────────────────────────
    def refresh(self, headers: Mapping[str, str]) -> str:
        """Exchange an active refresh token for a new access token. The refresh
        token itself is not rotated."""
        token = get_bearer_token(headers)
        try:
            record = self.sessions.find_by_token(token)
        except RecordNotFound as exc:
            raise SessionNotActive("refresh token not found") from exc

        state = session_state(record, self._clock())
        if state is not SessionState.ACTIVE:
            raise SessionNotActive(f"refresh token {state.value}")
        return self.issue_access_token(record.user_id)

    def revoke(self, headers: Mapping[str, str]) -> None:
        token = get_bearer_token(headers)
        if not self.sessions.revoke(token, self._clock()):
            logger.debug("revoke was a no-op (unknown or already revoked token)")

    def reset_sessions(self) -> int:
        return self.sessions.delete_all()

    # ─── Webhooks ────────────────────────────────
    def authorize_webhook(self, headers: Mapping[str, str]) -> None:
        key = get_api_key(headers)
        if not hmac.compare_digest(key.encode(), self.settings.polka_key.encode()):
            raise InvalidApiKey("api key mismatch")
