"""Integration tests for registration, login, two-factor auth and account lifecycle."""
from __future__ import annotations

import os
import time
from typing import Iterator

import pyotp
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_social_backend.db")

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Friendship, FriendshipStatus, Profile, User  # noqa: E402
from app.services import user_service  # noqa: E402
from app.services import ErrorKind, UserServiceError, create_user, enable_2fa, verify_2fa  # noqa: E402

PASSWORD = "Sup3r!Secret"


@pytest.fixture(scope="module", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    with SessionLocal() as session:
        session.execute(delete(Friendship))
        session.execute(delete(Profile))
        session.execute(delete(User))
        session.commit()
    yield


def _register(client: TestClient, username: str, password: str = PASSWORD, email: str | None = None) -> dict:
    response = client.post("/auth/register", json={"username": username, "password": password, "email": email})
    assert response.status_code == 201, response.text
    return response.json()


def _login(client: TestClient, username: str, password: str = PASSWORD, token: str | None = None):
    payload = {"username": username, "password": password}
    if token is not None:
        payload["token"] = token
    return client.post("/auth/login", json=payload)


def _enroll(client: TestClient, username: str) -> pyotp.TOTP:
    generated = client.post(f"/auth/{username}/2fa/generate")
    assert generated.status_code == 200, generated.text
    totp = pyotp.parse_uri(generated.json()["otpauth_url"])
    enabled = client.post(f"/auth/{username}/2fa/enable", json={"token": totp.now()})
    assert enabled.status_code == 200, enabled.text
    return totp


def test_register_returns_user_without_password_hash() -> None:
    with TestClient(app) as client:
        body = _register(client, "alice", email="alice@socialmail.io")

    assert body["message"] == "User created!"
    assert body["user"]["username"] == "alice"
    assert body["user"]["active"] is True
    assert body["user"]["two_factor_enabled"] is False
    assert "hashed_password" not in body["user"]
    assert "password" not in body["user"]


def test_weak_password_is_rejected_without_persisting() -> None:
    with TestClient(app) as client:
        response = client.post("/auth/register", json={"username": "bob", "password": "short"})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Password does not meet security requirements."
    assert isinstance(body["error"], list) and body["error"]

    with SessionLocal() as session:
        assert session.scalar(select(User).where(User.username == "bob")) is None


def test_duplicate_username_conflicts() -> None:
    with TestClient(app) as client:
        _register(client, "alice")
        response = client.post("/auth/register", json={"username": "alice", "password": PASSWORD})
    assert response.status_code == 409


def test_login_rejects_bad_credentials_with_one_message() -> None:
    with TestClient(app) as client:
        _register(client, "alice")
        wrong_password = _login(client, "alice", "Wrong!Pass1")
        unknown_user = _login(client, "nobody")
        ok = _login(client, "alice")

    assert wrong_password.status_code == 403
    assert unknown_user.status_code == 403
    assert wrong_password.json()["message"] == unknown_user.json()["message"]
    assert ok.status_code == 200, ok.text
    assert ok.json()["message"] == "User successfully logged in."
    assert "hashed_password" not in ok.json()["user"]


def test_disabled_user_cannot_login() -> None:
    with TestClient(app) as client:
        _register(client, "alice")
        disabled = client.patch("/users/alice")
        assert disabled.status_code == 200, disabled.text
        assert disabled.json()["user"]["active"] is False
        assert _login(client, "alice").status_code == 403


def test_enable_2fa_requires_generated_secret() -> None:
    with TestClient(app) as client:
        _register(client, "alice")
        response = client.post("/auth/alice/2fa/enable", json={"token": "123456"})
    assert response.status_code == 400
    assert response.json()["message"] == "2FA not initialized"


def test_generate_2fa_returns_provisioning_material() -> None:
    with TestClient(app) as client:
        _register(client, "alice")
        response = client.post("/auth/alice/2fa/generate")
        missing = client.post("/auth/ghost/2fa/generate")

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["otpauth_url"].startswith("otpauth://totp/")
    assert "alice" in body["otpauth_url"]
    assert body["qr"].startswith("data:image/png;base64,")
    assert missing.status_code == 404

    with SessionLocal() as session:
        user = session.scalar(select(User).where(User.username == "alice"))
        assert user.two_factor_secret
        assert user.two_factor_enabled is False


def test_enable_2fa_rejects_invalid_code() -> None:
    with TestClient(app) as client:
        _register(client, "alice")
        generated = client.post("/auth/alice/2fa/generate").json()
        stale = pyotp.parse_uri(generated["otpauth_url"]).at(time.time() - 3600)
        response = client.post("/auth/alice/2fa/enable", json={"token": stale})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid 2FA token"


def test_login_with_2fa_requires_valid_token() -> None:
    with TestClient(app) as client:
        _register(client, "alice")
        totp = _enroll(client, "alice")

        missing = _login(client, "alice")
        invalid = _login(client, "alice", token=totp.at(time.time() - 3600))
        valid = _login(client, "alice", token=totp.now())

    assert missing.status_code == 401
    assert missing.json()["message"] == "2FA token required."
    assert invalid.status_code == 401
    assert invalid.json()["message"] == "Invalid 2FA token."
    assert valid.status_code == 200, valid.text
    assert valid.json()["user"]["two_factor_enabled"] is True


def test_disable_2fa_clears_secret() -> None:
    with TestClient(app) as client:
        _register(client, "alice")
        _enroll(client, "alice")
        response = client.post("/auth/alice/2fa/disable")
        assert response.status_code == 200, response.text
        assert _login(client, "alice").status_code == 200

    with SessionLocal() as session:
        user = session.scalar(select(User).where(User.username == "alice"))
        assert user.two_factor_enabled is False
        assert user.two_factor_secret is None


def test_verify_2fa_is_false_when_not_enabled() -> None:
    with SessionLocal() as session:
        create_user(session, username="alice", password=PASSWORD)
        assert verify_2fa(session, username="alice", token="123456") is False
        assert verify_2fa(session, username="ghost", token="123456") is False


def test_enable_2fa_service_error_kind() -> None:
    with SessionLocal() as session:
        create_user(session, username="alice", password=PASSWORD)
        with pytest.raises(UserServiceError) as exc_info:
            enable_2fa(session, username="alice", token="123456")
    assert exc_info.value.kind == ErrorKind.INVALID_INPUT


def test_list_and_get_users() -> None:
    with TestClient(app) as client:
        empty = client.get("/users")
        assert empty.status_code == 404
        assert empty.json()["message"] == "No user was found!"

        _register(client, "alice")
        _register(client, "bob")
        listing = client.get("/users")
        single = client.get("/users/bob")
        missing = client.get("/users/ghost")

    assert listing.status_code == 200, listing.text
    assert sorted(user["username"] for user in listing.json()["users"]) == ["alice", "bob"]
    assert all("hashed_password" not in user for user in listing.json()["users"])
    assert single.json()["user"]["username"] == "bob"
    assert missing.status_code == 404


def test_update_user_rehashes_password() -> None:
    with TestClient(app) as client:
        _register(client, "alice")
        response = client.put("/users/alice", json={"email": "new@socialmail.io", "password": "N3w!Password"})
        assert response.status_code == 200, response.text
        assert response.json()["user"]["email"] == "new@socialmail.io"

        assert _login(client, "alice").status_code == 403
        assert _login(client, "alice", "N3w!Password").status_code == 200
        assert client.put("/users/ghost", json={"email": "x@socialmail.io"}).status_code == 404

    with SessionLocal() as session:
        user = session.scalar(select(User).where(User.username == "alice"))
        assert user.hashed_password != "N3w!Password"


def _seed_social_graph() -> None:
    with SessionLocal() as session:
        create_user(session, username="alice", password=PASSWORD)
        create_user(session, username="bob", password=PASSWORD)
        session.add(Profile(username="alice"))
        session.add(Friendship(requester_username="alice", addressee_username="bob", status=FriendshipStatus.ACCEPTED))
        session.add(Friendship(requester_username="bob", addressee_username="alice", status=FriendshipStatus.PENDING))
        session.commit()


def test_delete_user_removes_profile_and_friendships() -> None:
    _seed_social_graph()
    with TestClient(app) as client:
        response = client.delete("/users/alice")
        again = client.delete("/users/alice")

    assert response.status_code == 200, response.text
    assert response.json()["message"] == "User deleted successfully!"
    assert again.status_code == 404

    with SessionLocal() as session:
        assert session.scalar(select(User).where(User.username == "alice")) is None
        assert session.scalar(select(Profile).where(Profile.username == "alice")) is None
        assert session.scalars(select(Friendship)).first() is None
        assert session.scalar(select(User).where(User.username == "bob")) is not None


def test_delete_user_rolls_back_on_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    _seed_social_graph()

    def _fail(db, username):  # noqa: ANN001
        raise SQLAlchemyError("simulated failure")

    monkeypatch.setattr(user_service, "_purge_profile", _fail)

    with TestClient(app) as client:
        response = client.delete("/users/alice")

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to delete user"

    with SessionLocal() as session:
        assert session.scalar(select(User).where(User.username == "alice")) is not None
        assert session.scalar(select(Profile).where(Profile.username == "alice")) is not None
        assert len(list(session.scalars(select(Friendship)))) == 2
