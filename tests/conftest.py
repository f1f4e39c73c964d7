import os
import tempfile
from pathlib import Path

# Isolated lightweight DB, fast hashing and no startup side effects.
DB_PATH = Path(tempfile.gettempdir()) / "rakshak_test.db"
if DB_PATH.exists():
    DB_PATH.unlink()

os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{DB_PATH}"
os.environ["AUTO_RUN_MIGRATIONS"] = "false"
os.environ["AUTO_SEED_ADMIN_USER"] = "false"
os.environ.setdefault("AUTO_CREATE_DB", "true")
os.environ.setdefault("RAKSHAK_ENV", "dev")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("RAKSHAK_JWT_SECRET", "test-jwt-secret-strong-value-123456")
os.environ.setdefault("RAKSHAK_PASSWORD_HASH_ROUNDS", "1000")

import pytest
from fastapi.testclient import TestClient

from rakshak.core.db import SessionLocal, engine
from rakshak.core.rate_limit import limiter
from rakshak.core.security import hash_password
from rakshak.main import create_app
from rakshak.models import Base
from rakshak.models.user import User


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    limiter.reset()
    yield


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def create_user(
    *,
    username: str,
    password: str = "secret-pass",
    user_type: str = "citizen",
    email: str | None = None,
    is_active: bool = True,
) -> int:
    with SessionLocal() as db:
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            password_hash=hash_password(password),
            full_name=username.title(),
            mobile="9876543210",
            address="",
            user_type=user_type,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user.user_id


def login_headers(client: TestClient, username: str, password: str = "secret-pass") -> dict:
    resp = client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def citizen(client):
    user_id = create_user(username="asha")
    return {"user_id": user_id, "headers": login_headers(client, "asha")}


@pytest.fixture
def other_citizen(client):
    user_id = create_user(username="ravi")
    return {"user_id": user_id, "headers": login_headers(client, "ravi")}


@pytest.fixture
def officer(client):
    user_id = create_user(username="inspector", user_type="officer")
    return {"user_id": user_id, "headers": login_headers(client, "inspector")}


@pytest.fixture
def admin(client):
    user_id = create_user(username="root", user_type="admin")
    return {"user_id": user_id, "headers": login_headers(client, "root")}
