"""
Credential extraction from request headers.

Both helpers only strip an anchored scheme prefix; a header that does not start
with the expected scheme is treated as malformed.
"""
from __future__ import annotations

from typing import Mapping

from utils.exceptions import MissingOrMalformedToken

AUTHORIZATION = "Authorization"
BEARER_PREFIX = "Bearer "
API_KEY_PREFIX = "ApiKey "


def _get_scheme_value(headers: Mapping[str, str], prefix: str) -> str:
    value = headers.get(AUTHORIZATION)
    if not value:
        raise MissingOrMalformedToken("no authorization header")
    if not value.startswith(prefix):
        raise MissingOrMalformedToken(f"authorization scheme is not {prefix.strip()}")
    credential = value[len(prefix):].strip()
    if not credential:
        raise MissingOrMalformedToken("empty credential")
    return credential


def get_bearer_token(headers: Mapping[str, str]) -> str:
    """Return the token from `Authorization: Bearer <token>`."""
    return _get_scheme_value(headers, BEARER_PREFIX)


def get_api_key(headers: Mapping[str, str]) -> str:
    """Return the key from `Authorization: ApiKey <key>`."""
    return _get_scheme_value(headers, API_KEY_PREFIX)
