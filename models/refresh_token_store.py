"""
Persistence for refresh-token sessions.

The store only reads and writes rows; deciding whether a session is still
usable is the auth service's job.
"""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from models.base_model import utcnow
from models.refresh_token import RefreshToken
from utils.exceptions import RecordNotFound, StoreFailure

logger = logging.getLogger(__name__)


class RefreshTokenStore:
    def __init__(self, storage):
        self._storage = storage

    def _fail(self, action: str, exc: SQLAlchemyError):
        self._storage.rollback()
        logger.error("refresh token store failed to %s", action, exc_info=exc)
        return StoreFailure(f"could not {action} refresh token")

    def create(self, user_id: str, token: str, expires_at: datetime) -> RefreshToken:
        record = RefreshToken(token=token, user_id=str(user_id), expires_at=expires_at)
        try:
            self._storage.new(record)
            self._storage.save()
        except SQLAlchemyError as exc:
            raise self._fail("create", exc) from exc
        return record

    def find_by_token(self, token: str) -> RefreshToken:
        try:
            record = self._storage.get_session().get(RefreshToken, token)
        except SQLAlchemyError as exc:
            raise self._fail("load", exc) from exc
        if record is None:
            raise RecordNotFound("refresh token not found")
        return record

    def revoke(self, token: str, now: datetime | None = None) -> bool:
        """Set revoked_at if it is not set yet. Returns True when a row changed;
        revoking an unknown or already revoked token is not an error."""
        now = now or utcnow()
        session = self._storage.get_session()
        try:
            changed = (
                session.query(RefreshToken)
                .filter(RefreshToken.token == token, RefreshToken.revoked_at.is_(None))
                .update({"revoked_at": now, "updated_at": now}, synchronize_session="fetch")
            )
            self._storage.save()
        except SQLAlchemyError as exc:
            raise self._fail("revoke", exc) from exc
        return bool(changed)

    def delete_all(self) -> int:
        try:
            deleted = self._storage.delete_all(RefreshToken)
            self._storage.save()
        except SQLAlchemyError as exc:
            raise self._fail("delete", exc) from exc
        return deleted
