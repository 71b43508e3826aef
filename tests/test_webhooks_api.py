# tests/test_webhooks_api.py
import uuid

TEST_PASSWORD = "04234"


def api_key(app):
    return {"Authorization": f"ApiKey {app.config['POLKA_KEY']}"}


def upgrade_event(user_id):
    return {"event": "user.upgraded", "data": {"user_id": user_id}}


def test_upgrade_user(client, app, register):
    user = register("lane@example.com")

    r = client.post("/api/polka/webhooks", json=upgrade_event(user["id"]), headers=api_key(app))
    assert r.status_code == 204

    login = client.post("/api/login", json={"email": "lane@example.com", "password": TEST_PASSWORD})
    assert login.get_json()["is_chirpy_red"] is True


def test_other_events_are_ignored(client, app, register):
    user = register()
    r = client.post(
        "/api/polka/webhooks",
        json={"event": "user.payment_failed", "data": {"user_id": user["id"]}},
        headers=api_key(app),
    )
    assert r.status_code == 204


def test_unknown_user(client, app):
    r = client.post("/api/polka/webhooks", json=upgrade_event(str(uuid.uuid4())), headers=api_key(app))
    assert r.status_code == 404


def test_api_key_required(client, register):
    user = register()
    event = upgrade_event(user["id"])

    assert client.post("/api/polka/webhooks", json=event).status_code == 401
    r = client.post("/api/polka/webhooks", json=event, headers={"Authorization": "ApiKey wrong"})
    assert r.status_code == 401
    assert r.get_json()["error"] == "Unauthorized"
