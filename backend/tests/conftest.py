from collections.abc import Callable, Iterator

import pytest
from litestar.testing import TestClient

from app import create_app
from core.config import AppConfig, AuthConfig, DatabaseConfig, ServerConfig
from core.store import InMemoryStore


TEST_SECRET = "test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(host=""),
        auth=AuthConfig(token_secret=TEST_SECRET, token_expire_minutes=30),
        app=ServerConfig(environment="development"),
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def client(config: AppConfig, store: InMemoryStore) -> Iterator[TestClient]:
    with TestClient(app=create_app(config=config, store=store)) as client:
        yield client


@pytest.fixture
def make_user(client: TestClient) -> Callable[..., tuple[str, dict[str, str]]]:
    """Register and log in a user; returns (user_id, auth headers)."""

    def _make_user(
        username: str, email: str | None = None, password: str = "secret-pw"
    ) -> tuple[str, dict[str, str]]:
        email = email or f"{username}@x.com"
        response = client.post(
            "/api/users/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        user_id = response.json()["id"]

        response = client.post(
            "/api/users/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        token = response.json()["accessToken"]
        return user_id, {"Authorization": f"Bearer {token}"}

    return _make_user
