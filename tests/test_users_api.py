# tests/test_users_api.py
TEST_PASSWORD = "04234"


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_create_user(client):
    r = client.post("/api/users", json={"email": "mloneusk@example.co", "password": TEST_PASSWORD})
    assert r.status_code == 201
    body = r.get_json()
    assert body["email"] == "mloneusk@example.co"
    assert body["is_chirpy_red"] is False
    assert set(body) == {"id", "email", "created_at", "updated_at", "is_chirpy_red"}


def test_duplicate_email(client, register):
    register("mloneusk@example.co")
    r = client.post("/api/users", json={"email": "mloneusk@example.co", "password": TEST_PASSWORD})
    assert r.status_code == 409


def test_create_user_validation(client):
    assert client.post("/api/users", json={"password": TEST_PASSWORD}).status_code == 422
    assert client.post("/api/users", json={"email": "not-an-email", "password": TEST_PASSWORD}).status_code == 422
    assert client.post("/api/users", json={"email": "a@example.com"}).status_code == 422
    r = client.post("/api/users", data="not json", content_type="text/plain")
    assert r.status_code == 422


def test_update_user(client, login):
    tokens = login()

    r = client.put(
        "/api/users",
        json={"email": "new@example.com", "password": "new-password"},
        headers=bearer(tokens["token"]),
    )
    assert r.status_code == 200
    assert r.get_json()["email"] == "new@example.com"

    old = client.post("/api/login", json={"email": tokens["email"], "password": TEST_PASSWORD})
    assert old.status_code == 401
    new = client.post("/api/login", json={"email": "new@example.com", "password": "new-password"})
    assert new.status_code == 200
    assert new.get_json()["id"] == tokens["id"]


def test_update_user_requires_access_token(client, login):
    tokens = login()
    payload = {"email": "new@example.com", "password": "new-password"}

    assert client.put("/api/users", json=payload).status_code == 401
    # a refresh token is not an access token
    assert client.put("/api/users", json=payload, headers=bearer(tokens["refresh_token"])).status_code == 401
    assert client.put("/api/users", json=payload, headers={"Authorization": tokens["token"]}).status_code == 401


def test_update_user_email_taken(client, login, register):
    register("taken@example.com")
    tokens = login()
    r = client.put(
        "/api/users",
        json={"email": "taken@example.com", "password": TEST_PASSWORD},
        headers=bearer(tokens["token"]),
    )
    assert r.status_code == 409


def test_update_user_after_user_was_deleted(client, login):
    tokens = login()
    assert client.post("/admin/reset").status_code == 200

    r = client.put(
        "/api/users",
        json={"email": tokens["email"], "password": TEST_PASSWORD},
        headers=bearer(tokens["token"]),
    )
    assert r.status_code == 401
    assert r.get_json()["error"] == "Unauthorized"
