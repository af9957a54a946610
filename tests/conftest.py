import sqlite3

import pytest
from fastapi.testclient import TestClient

from auth_service.core.config import Settings
from auth_service.main import create_app


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "auth.db"


@pytest.fixture
def settings(tmp_path, db_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{db_path}",
        UPLOADS_DIR=str(tmp_path / "uploads"),
        PUBLIC_DIR=str(tmp_path / "public"),
        DB_CONNECT_RETRIES=1,
        DB_RETRY_MIN_DELAY=0,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def rows(db_path):
    """Lee la tabla users directo del archivo sqlite."""

    def _rows(where: str = "", params: tuple = ()):
        conn = sqlite3.connect(db_path)
        conn.row_factory = sqlite3.Row
        try:
            return [dict(r) for r in conn.execute(f"SELECT * FROM users {where}", params)]
        finally:
            conn.close()

    return _rows


def signup(client, username="alice", email="a@x.com", password="pw123", files=None):
    return client.post(
        "/api/signup",
        data={"username": username, "email": email, "password": password},
        files=files,
    )
