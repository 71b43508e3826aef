from __future__ import annotations
from functools import wraps
from flask import current_app, g, request
from models import storage
from models.user import User
from utils.exceptions import InvalidOrExpiredAccessToken

AUTH_EXTENSION = "chirpy.auth"


def get_auth_service():
    """The AuthService built for the current app by create_app()."""
    return current_app.extensions[AUTH_EXTENSION]


def jwt_required():
    """Require a valid access token; exposes the caller as g.current_user_id.
    Failures raise AuthError subclasses, which the error handlers turn into 401."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user_id = get_auth_service().authorize(request.headers)
            g.current_user_id = str(user_id)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def get_current_user() -> User:
    """Load the user behind g.current_user_id. A token can outlive its user
    (e.g. after an admin reset); that is treated like any other bad token."""
    user = storage.get(User, g.current_user_id)
    if not user:
        raise InvalidOrExpiredAccessToken("token subject no longer exists")
    return user


def api_key_required():
    """Require the Polka API key in `Authorization: ApiKey <key>`."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            get_auth_service().authorize_webhook(request.headers)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
