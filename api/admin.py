import logging

from flask import Blueprint, abort, current_app
from sqlalchemy.exc import SQLAlchemyError

from models import storage
from models.chirp import Chirp
from models.user import User
from utils.decorators import get_auth_service
from utils.exceptions import StoreFailure
from .metrics import HITS_EXTENSION

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_TEMPLATE = """
    <html>
      <body>
        <h1>Welcome, Chirpy Admin</h1>
        <p>Chirpy has been visited {hits} times!</p>
      </body>
    </html>
"""


def _hits():
    return current_app.extensions[HITS_EXTENSION]


@bp.get("/metrics")
def metrics():
    """
    File server hit count
    ---
    tags:
      - Admin
    produces:
      - text/html
    responses:
      200:
        description: HTML page with the hit count
    """
    return METRICS_TEMPLATE.format(hits=_hits().value), 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
def reset():
    """
    Delete every user, chirp and refresh token and zero the hit counter (dev only)
    ---
    tags:
      - Admin
    responses:
      200:
        description: Reset done
      403:
        description: Not running on the dev platform
    """
    if current_app.config.get("PLATFORM") != "dev":
        abort(403, description="Reset is only allowed in dev")

    sessions = get_auth_service().reset_sessions()
    try:
        chirps = storage.delete_all(Chirp)
        users = storage.delete_all(User)
        storage.save()
    except SQLAlchemyError as exc:
        storage.rollback()
        raise StoreFailure("could not reset users") from exc

    previous_hits = _hits().reset()
    logger.warning(
        "admin reset: removed %d users, %d chirps, %d sessions; hits were %d",
        users, chirps, sessions, previous_hits,
    )
    return "", 200, {"Content-Type": "text/plain; charset=utf-8"}
