"""
Error taxonomy for the auth core.

Every AuthError carries an AuthReason tag for server-side logging. The HTTP
layer collapses all of them into a single 401 response, so clients never learn
which check failed.
"""
from __future__ import annotations

from enum import Enum


class AuthReason(str, Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    MISSING_OR_MALFORMED_TOKEN = "missing_or_malformed_token"
    INVALID_OR_EXPIRED_ACCESS_TOKEN = "invalid_or_expired_access_token"
    SESSION_NOT_ACTIVE = "session_not_active"
    INVALID_API_KEY = "invalid_api_key"


class AuthError(Exception):
    reason: AuthReason
    public_message = "Unauthorized"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.reason.value)
        self.detail = detail


class InvalidCredentials(AuthError):
    reason = AuthReason.INVALID_CREDENTIALS
    public_message = "Incorrect email or password"


class MissingOrMalformedToken(AuthError):
    reason = AuthReason.MISSING_OR_MALFORMED_TOKEN


class InvalidOrExpiredAccessToken(AuthError):
    reason = AuthReason.INVALID_OR_EXPIRED_ACCESS_TOKEN


class SessionNotActive(AuthError):
    reason = AuthReason.SESSION_NOT_ACTIVE


class InvalidApiKey(AuthError):
    reason = AuthReason.INVALID_API_KEY


class RecordNotFound(LookupError):
    """Raised by stores when a lookup by key finds nothing."""


class StoreFailure(Exception):
    """Any persistence-layer error; surfaced to clients as a generic 500."""
