# tests/test_admin_api.py
from unittest.mock import patch

import pytest

from api import create_app
from models import storage
from models.chirp import Chirp
from models.refresh_token import RefreshToken
from models.user import User


@pytest.fixture
def static_root(app, tmp_path):
    (tmp_path / "index.html").write_text("<h1>Welcome to Chirpy</h1>")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "logo.txt").write_text("logo")
    app.config["FILESERVER_ROOT"] = str(tmp_path)
    return tmp_path


def test_healthz(client):
    r = client.get("/api/healthz")
    assert r.status_code == 200
    assert r.data == b"OK"
    assert r.content_type.startswith("text/plain")


def test_fileserver(client, static_root):
    r = client.get("/app/")
    assert r.status_code == 200
    assert b"Welcome to Chirpy" in r.data
    assert r.headers["Cache-Control"] == "no-cache"

    r = client.get("/app/assets/logo.txt")
    assert r.status_code == 200
    assert r.data == b"logo"

    assert client.get("/app/missing.html").status_code == 404


def test_metrics_count_fileserver_hits(client, static_root):
    for _ in range(3):
        client.get("/app/")
    client.get("/api/healthz")

    r = client.get("/admin/metrics")
    assert r.status_code == 200
    assert r.content_type.startswith("text/html")
    assert b"Chirpy has been visited 3 times!" in r.data


def test_reset(client, static_root, login):
    tokens = login()
    client.post("/api/chirps", json={"body": "hello"}, headers={"Authorization": f"Bearer {tokens['token']}"})
    client.get("/app/")

    r = client.post("/admin/reset")
    assert r.status_code == 200

    assert storage.count(User) == 0
    assert storage.count(Chirp) == 0
    assert storage.count(RefreshToken) == 0
    assert b"visited 0 times" in client.get("/admin/metrics").data
    assert client.post("/api/refresh", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}).status_code == 401


def test_reset_only_in_dev(client, app, register):
    app.config["PLATFORM"] = "production"
    register()

    r = client.post("/admin/reset")
    assert r.status_code == 403
    assert storage.count(User) == 1


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.get_json()["error"] == "NOT_FOUND"


def test_unhandled_errors_hide_details_even_in_debug():
    app = create_app("dev")
    assert app.debug
    client = app.test_client()

    with patch("api.chirps.parse_sort", side_effect=RuntimeError("postgres://admin:hunter2@db")):
        r = client.get("/api/chirps")

    assert r.status_code == 500
    assert r.get_json() == {
        "error": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "status": 500,
    }
