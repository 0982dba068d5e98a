import pytest
from fastapi.testclient import TestClient

from app.core.config import get_settings

TEST_SECRET = "test-secret-do-not-use"


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", TEST_SECRET)
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("ENV", "test")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from app.main import create_app

    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def login(client):
    """Inscrit puis connecte un utilisateur ; renvoie les headers d'auth."""

    def _login(username: str = "alice", password: str = "pw") -> dict:
        r = client.post("/register", json={"username": username, "password": password})
        assert r.status_code == 201, r.text
        r = client.post("/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _login
