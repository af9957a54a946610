import asyncio
import os

import pytest
from fastapi.testclient import TestClient

from auth_service.core.config import Settings
from auth_service.core.security import verify_password
from auth_service.main import create_app

from conftest import signup


def test_alice_scenario(client):
    res = signup(client)
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "User created"
    assert isinstance(body["userId"], int)

    res = client.post("/api/login", json={"email": "a@x.com", "password": "pw123"})
    assert res.status_code == 200
    assert res.json() == {"message": "Login successful", "userId": body["userId"]}

    res = client.post("/api/login", json={"email": "a@x.com", "password": "wrong"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid credentials"}


def test_password_is_stored_hashed(client, rows):
    assert signup(client).status_code == 201
    (user,) = rows()
    assert user["password"] != "pw123"
    assert verify_password("pw123", user["password"])
    assert user["profile_image"] is None
    assert user["created_at"] is not None


def test_duplicate_email_only_one_row(client, rows):
    first = signup(client, username="alice")
    second = signup(client, username="alice2")
    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json() == {"error": "User already exists"}
    assert len(rows("WHERE email = ?", ("a@x.com",))) == 1


def test_duplicate_username_conflicts(client):
    assert signup(client, email="a@x.com").status_code == 201
    assert signup(client, email="b@x.com").status_code == 409


def test_signup_missing_field(client, rows):
    res = client.post("/api/signup", data={"username": "alice", "email": "a@x.com"})
    assert res.status_code == 400
    assert "error" in res.json()
    assert rows() == []


def test_signup_with_profile_image(client, rows, settings):
    files = {"profileImage": ("me.jpg", b"jpeg-bytes", "image/jpeg")}
    assert signup(client, files=files).status_code == 201

    (user,) = rows()
    ref = user["profile_image"]
    assert ref.startswith("/uploads/") and ref.endswith(".jpg")

    res = client.get(ref)
    assert res.status_code == 200
    assert res.content == b"jpeg-bytes"


def test_failed_signup_removes_upload(client, settings):
    assert signup(client).status_code == 201
    files = {"profileImage": ("me.png", b"png", "image/png")}
    assert signup(client, username="other", files=files).status_code == 409
    assert os.listdir(settings.UPLOADS_DIR) == []


@pytest.mark.parametrize("password", ["pw123", "anything", ""])
def test_login_unknown_email_is_401(client, password):
    res = client.post("/api/login", json={"email": "ghost@x.com", "password": password})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid credentials"}


def test_login_wrong_password_same_shape_as_unknown_email(client):
    signup(client)
    wrong = client.post("/api/login", json={"email": "a@x.com", "password": "nope"})
    unknown = client.post("/api/login", json={"email": "ghost@x.com", "password": "nope"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


def test_login_missing_fields_is_401(client):
    assert client.post("/api/login", json={}).status_code == 401


def test_forgot(client):
    signup(client)
    res = client.post("/api/forgot", json={"email": "a@x.com"})
    assert res.status_code == 200
    assert res.json() == {"message": "Password reset link sent"}

    res = client.post("/api/forgot", json={"email": "ghost@x.com"})
    assert res.status_code == 404
    assert res.json() == {"error": "User not found"}


def test_check_email_data(client):
    signup(client)
    assert client.post("/check-email-data", json={"email": "a@x.com"}).json() == {"exists": True}
    assert client.post("/check-email-data", json={"email": "b@x.com"}).json() == {"exists": False}

    res = client.post("/check-email-data", json={})
    assert res.status_code == 400
    assert res.json() == {"error": "Email is required"}


def test_malformed_body_is_400(client):
    res = client.post(
        "/api/login",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid request body"}


def test_health_connected(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert "timestamp" in body


def unreachable_settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'auth.db'}",
        UPLOADS_DIR=str(tmp_path / "uploads"),
        PUBLIC_DIR=str(tmp_path / "public"),
        DB_CONNECT_RETRIES=2,
        DB_RETRY_MIN_DELAY=0,
    )


def test_health_disconnected(tmp_path):
    # sin `with`: no corre el lifespan, la app responde aunque la DB no exista
    client = TestClient(create_app(unreachable_settings(tmp_path)))
    res = client.get("/api/health")
    assert res.status_code == 503
    body = res.json()
    assert body["status"] == "unhealthy"
    assert body["database"] == "disconnected"
    assert body["error"]


def test_startup_fails_when_db_unreachable(tmp_path):
    app = create_app(unreachable_settings(tmp_path))
    with pytest.raises(Exception):
        with TestClient(app):
            pass


def test_cors_allows_configured_origin(tmp_path, settings):
    settings.ALLOWED_ORIGINS = "http://front.test"
    with TestClient(create_app(settings)) as c:
        res = c.options(
            "/api/login",
            headers={"Origin": "http://front.test", "Access-Control-Request-Method": "POST"},
        )
    assert res.headers["access-control-allow-origin"] == "http://front.test"


def test_public_dir_served_when_present(tmp_path, settings):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>hi</h1>")
    with TestClient(create_app(settings)) as c:
        assert c.get("/").text == "<h1>hi</h1>"
        assert c.get("/api/health").json()["status"] == "healthy"


def closed_port_settings(tmp_path):
    return Settings(
        DATABASE_URL="postgresql+asyncpg://u:p@127.0.0.1:1/x",
        UPLOADS_DIR=str(tmp_path / "uploads"),
        PUBLIC_DIR=str(tmp_path / "public"),
        DB_CONNECT_TIMEOUT=2,
    )


@pytest.mark.parametrize(
    "path, payload, message",
    [
        ("/api/login", {"email": "a@x.com", "password": "pw123"}, "Failed to login"),
        ("/api/forgot", {"email": "a@x.com"}, "Failed to process request"),
        ("/check-email-data", {"email": "a@x.com"}, "Internal server error"),
    ],
)
def test_store_down_returns_json_500(tmp_path, path, payload, message):
    client = TestClient(create_app(closed_port_settings(tmp_path)))
    res = client.post(path, json=payload)
    assert res.status_code == 500
    assert res.json() == {"error": message}


def test_signup_store_down_returns_json_500(tmp_path):
    client = TestClient(create_app(closed_port_settings(tmp_path)))
    res = signup(client)
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to create user"}


def test_unexpected_error_returns_json_500(settings, monkeypatch):
    from auth_service.users import service as svc

    async def boom(db, email):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(svc, "check_email", boom)
    with TestClient(create_app(settings), raise_server_exceptions=False) as c:
        res = c.post("/check-email-data", json={"email": "a@x.com"})
    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}


def test_health_connect_timeout_is_503(settings):
    app = create_app(settings)

    async def timeout():
        raise asyncio.TimeoutError()

    with TestClient(app) as c:
        app.state.database.ping = timeout
        res = c.get("/api/health")
    assert res.status_code == 503
    assert res.json()["status"] == "unhealthy"
