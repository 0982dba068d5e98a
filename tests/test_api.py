from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from jose.exceptions import JWSError
from pydantic import ValidationError

from app.api.v1.dependencies import get_store
from app.core.config import Settings, get_settings
from app.db.repositories import users as users_repository
from app.db.repositories.todos import TodoStore
from app.main import create_app
from app.security.tokens import JWTSettings, TokenService


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class TestEndToEnd:
    def test_full_scenario(self, client):
        r = client.post("/register", json={"username": "alice", "password": "pw"})
        assert r.status_code == 201
        assert r.json() == {"message": "User created"}

        r = client.post("/login", json={"username": "alice", "password": "pw"})
        assert r.status_code == 200
        body = r.json()
        assert body["token"]
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 24 * 3600
        headers = {"Authorization": f"Bearer {body['token']}"}

        r = client.post("/todos", json={"title": "first task"}, headers=headers)
        assert r.status_code == 201
        todo = r.json()
        assert todo["id"]
        assert todo["title"] == "first task"
        assert todo["completed"] is False
        assert "created_at" in todo
        assert "version" not in todo

        r = client.get("/todos", headers=headers)
        assert r.status_code == 200
        assert len(r.json()) == 1

        r = client.put(f"/todos/{todo['id']}", json={"title": "updated"}, headers=headers)
        assert r.status_code == 200
        assert r.json()["title"] == "updated"

        r = client.delete(f"/todos/{todo['id']}", headers=headers)
        assert r.status_code == 200
        assert r.json() == {"message": "Todo deleted"}

        r = client.get("/todos", headers=headers)
        assert r.status_code == 200
        assert r.json() == []


class TestRegisterLogin:
    def test_duplicate_registration_conflicts(self, client):
        assert client.post("/register", json={"username": "a", "password": "p"}).status_code == 201
        r = client.post("/register", json={"username": "a", "password": "q"})
        assert r.status_code == 409

    @pytest.mark.parametrize(
        "payload",
        [
            {"username": "", "password": "pw"},
            {"username": "alice", "password": ""},
            {"username": "alice"},
            {},
        ],
    )
    def test_missing_fields_are_bad_requests(self, client, payload):
        assert client.post("/register", json=payload).status_code == 400
        assert client.post("/login", json=payload).status_code == 400

    def test_invalid_json_is_bad_request(self, client):
        r = client.post("/register", content="{not json", headers={"Content-Type": "application/json"})
        assert r.status_code == 400

    def test_bad_credentials_are_indistinguishable(self, client, login):
        login("alice", "pw")
        wrong = client.post("/login", json={"username": "alice", "password": "nope"})
        unknown = client.post("/login", json={"username": "bob", "password": "pw"})
        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json()


class TestGate:
    def test_missing_token(self, client):
        r = client.get("/todos")
        assert r.status_code == 401
        assert r.headers["WWW-Authenticate"] == "Bearer"

    def test_wrong_scheme(self, client, login):
        token = login()["Authorization"].split(" ", 1)[1]
        r = client.get("/todos", headers={"Authorization": f"Basic {token}"})
        assert r.status_code == 401

    def test_every_token_failure_looks_the_same(self, client, login):
        login()
        past = datetime.now(timezone.utc) - timedelta(hours=48)
        expired = TokenService(JWTSettings(secret=get_settings().JWT_SECRET_KEY), now_fn=lambda: past).issue("alice")
        foreign = TokenService(JWTSettings(secret="other-secret")).issue("alice")
        responses = [
            client.get("/todos", headers={"Authorization": f"Bearer {token}"})
            for token in (expired, foreign, "not-a-token")
        ]
        assert {r.status_code for r in responses} == {401}
        assert len({r.text for r in responses}) == 1

    def test_identity_comes_from_token_only(self, client, login):
        alice = login("alice", "pw")
        login("bob", "pw")
        r = client.post("/todos", json={"title": "x", "username": "bob"}, headers=alice)
        assert r.status_code == 201
        r = client.get("/todos?username=bob", headers=alice)
        assert [t["title"] for t in r.json()] == ["x"]


class TestTodos:
    def test_create_requires_title(self, client, login):
        headers = login()
        assert client.post("/todos", json={}, headers=headers).status_code == 400
        assert client.post("/todos", json={"title": ""}, headers=headers).status_code == 400

    def test_patch_is_partial(self, client, login):
        headers = login()
        todo = client.post("/todos", json={"title": "x"}, headers=headers).json()
        r = client.patch(f"/todos/{todo['id']}", json={"completed": True}, headers=headers)
        assert r.status_code == 200
        assert r.json()["title"] == "x"
        assert r.json()["completed"] is True

    def test_unknown_id(self, client, login):
        headers = login()
        assert client.get("/todos/nope", headers=headers).status_code == 404
        assert client.put("/todos/nope", json={"title": "y"}, headers=headers).status_code == 404
        assert client.delete("/todos/nope", headers=headers).status_code == 404

    def test_foreign_task_is_not_found(self, client, login):
        alice = login("alice", "pw")
        bob = login("bob", "pw")
        todo = client.post("/todos", json={"title": "alice's"}, headers=alice).json()

        missing = client.get("/todos/does-not-exist", headers=bob)
        for r in (
            client.get(f"/todos/{todo['id']}", headers=bob),
            client.put(f"/todos/{todo['id']}", json={"title": "pwned"}, headers=bob),
            client.delete(f"/todos/{todo['id']}", headers=bob),
        ):
            assert r.status_code == 404
            assert r.json() == missing.json()

        assert client.get(f"/todos/{todo['id']}", headers=alice).json()["title"] == "alice's"
        assert client.get("/todos", headers=bob).json() == []

    def test_delete_twice(self, client, login):
        headers = login()
        todo = client.post("/todos", json={"title": "x"}, headers=headers).json()
        assert client.delete(f"/todos/{todo['id']}", headers=headers).status_code == 200
        assert client.get(f"/todos/{todo['id']}", headers=headers).status_code == 404
        assert client.delete(f"/todos/{todo['id']}", headers=headers).status_code == 404


class TestStartup:
    def test_missing_secret_is_rejected_by_settings(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY")
        with pytest.raises(ValidationError):
            Settings()

    def test_blank_secret_is_rejected_by_settings(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET_KEY", "   ")
        with pytest.raises(ValidationError):
            Settings()

    def test_app_refuses_to_start_without_secret(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY")
        with pytest.raises(ValidationError):
            with TestClient(create_app()):
                pass

    def test_settings_defaults(self):
        settings = get_settings()
        assert settings.TOKEN_TTL_HOURS == 24
        assert settings.JWT_ALGORITHM == "HS256"
        assert settings.BCRYPT_ROUNDS == 4

    @pytest.mark.parametrize("algorithm", ["HS257", "RS256", "none"])
    def test_non_hmac_algorithm_is_rejected(self, monkeypatch, algorithm):
        monkeypatch.setenv("JWT_ALGORITHM", algorithm)
        with pytest.raises(ValidationError):
            Settings()
        with pytest.raises(ValidationError):
            with TestClient(create_app()):
                pass

    def test_hmac_algorithms_are_accepted(self, monkeypatch):
        for algorithm in ("HS256", "HS384", "HS512"):
            monkeypatch.setenv("JWT_ALGORITHM", algorithm)
            assert Settings().JWT_ALGORITHM == algorithm


class TestDependencies:
    def test_routes_use_the_injected_store(self, client, login):
        store = TodoStore()
        client.app.dependency_overrides[get_store] = lambda: store
        try:
            headers = login()
            r = client.post("/todos", json={"title": "x"}, headers=headers)
            assert r.status_code == 201
        finally:
            client.app.dependency_overrides.clear()
        assert [t.title for t in store.list("alice")] == ["x"]
        assert client.app.state.storage.store.list("alice") == []

    def test_vault_comes_from_app_state(self, client, login):
        login("alice", "pw")
        assert client.app.state.storage.vault.exists("alice")


class TestInternalErrors:
    def test_hashing_failure_is_500_and_stores_nothing(self, client, monkeypatch):
        def broken_hash(password, rounds=12):
            raise ValueError("bcrypt exploded")

        monkeypatch.setattr(users_repository, "hash_password", broken_hash)
        r = client.post("/register", json={"username": "alice", "password": "pw"})
        assert r.status_code == 500
        assert r.json() == {"detail": "Encryption error"}
        assert client.app.state.storage.vault.count() == 0

    def test_signing_failure_is_500(self, client, monkeypatch):
        client.post("/register", json={"username": "alice", "password": "pw"})

        def broken_encode(*args, **kwargs):
            raise JWSError("signing exploded")

        monkeypatch.setattr(jwt, "encode", broken_encode)
        r = client.post("/login", json={"username": "alice", "password": "pw"})
        assert r.status_code == 500
        assert r.json() == {"detail": "Token generation failed"}

    def test_password_over_72_bytes_is_refused(self, client):
        long_password = "x" * 73
        r = client.post("/register", json={"username": "alice", "password": long_password})
        assert r.status_code == 500
        assert r.json() == {"detail": "Encryption error"}
        assert not client.app.state.storage.vault.exists("alice")

    def test_passwords_sharing_72_bytes_do_not_collide(self, client):
        base = "y" * 72
        assert client.post("/register", json={"username": "alice", "password": base}).status_code == 201
        r = client.post("/login", json={"username": "alice", "password": base + "suffix"})
        assert r.status_code == 401
        assert client.post("/login", json={"username": "alice", "password": base}).status_code == 200
