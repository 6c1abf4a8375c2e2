import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'backoffice_test.db'}",
        SECRET_KEY="test-secret",
        ALGORITHM="HS256",
        ACCESS_TOKEN_EXPIRE_MINUTES=60,
        BCRYPT_ROUNDS=4,
        SEED_DEFAULT_USERS=True,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan: tables + default accounts
    with TestClient(app) as c:
        yield c


def login(client, username, password):
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    return bearer(login(client, "admin", "admin123")["token"])


@pytest.fixture
def sales_headers(client):
    return bearer(login(client, "sales01", "sales123")["token"])


@pytest.fixture
def hr_headers(client):
    return bearer(login(client, "hr01", "hr123")["token"])
