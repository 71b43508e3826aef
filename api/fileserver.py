"""Static files under /app/, counted by the hit counter shown at /admin/metrics."""
import os

from flask import Blueprint, current_app, send_from_directory

from .metrics import HITS_EXTENSION

bp = Blueprint("fileserver", __name__)


@bp.before_request
def count_hit():
    current_app.extensions[HITS_EXTENSION].increment()


@bp.after_request
def no_cache(response):
    response.headers["Cache-Control"] = "no-cache"
    return response


@bp.get("/", defaults={"filename": "index.html"})
@bp.get("/<path:filename>")
def serve(filename: str):
    root = os.path.abspath(current_app.config.get("FILESERVER_ROOT", "."))
    return send_from_directory(root, filename)
