import jwt
from litestar.testing import TestClient

from app import create_app
from core.config import AuthConfig
from core.store import InMemoryStore
from core.tokens import create_access_token


def _register(client: TestClient, **body):
    payload = {"username": "alice", "email": "alice@x.com", "password": "pw"}
    payload.update(body)
    return client.post("/api/users/register", json=payload)


def test_register_returns_id_and_email(client, store):
    response = _register(client)

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"id", "email"}
    assert body["email"] == "alice@x.com"

    stored = store.users[body["id"]]
    assert stored.username == "alice"
    assert stored.password != "pw"


def test_register_duplicate_email_rejected(client):
    assert _register(client).status_code == 201

    response = _register(client, username="other")

    assert response.status_code == 400
    body = response.json()
    assert body["title"] == "Validation Failed"
    assert body["message"] == "User already registered!"


def test_register_missing_field(client, store):
    response = client.post(
        "/api/users/register", json={"username": "alice", "email": "alice@x.com"}
    )

    assert response.status_code == 400
    assert response.json()["title"] == "Validation Failed"
    assert store.users == {}


def test_register_empty_field(client, store):
    response = _register(client, password="")

    assert response.status_code == 400
    assert response.json()["message"] == "All fields are mandatory!"
    assert store.users == {}


def test_register_rejects_unknown_field(client):
    response = _register(client, role="admin")

    assert response.status_code == 400


def test_login_token_carries_identity(client, config):
    user_id = _register(client).json()["id"]

    response = client.post(
        "/api/users/login", json={"email": "alice@x.com", "password": "pw"}
    )

    assert response.status_code == 200
    token = response.json()["accessToken"]
    claims = jwt.decode(token, config.auth.token_secret, algorithms=["HS256"])
    assert claims["sub"] == user_id
    assert claims["username"] == "alice"
    assert claims["email"] == "alice@x.com"
    assert claims["exp"] - claims["iat"] == 30 * 60


def test_login_failures_share_one_message(client):
    _register(client)

    wrong_password = client.post(
        "/api/users/login", json={"email": "alice@x.com", "password": "nope"}
    )
    unknown_email = client.post(
        "/api/users/login", json={"email": "nobody@x.com", "password": "pw"}
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json()["message"] == unknown_email.json()["message"]
    assert wrong_password.json()["title"] == "Unauthorized"


def test_login_missing_fields(client):
    response = client.post("/api/users/login", json={"email": "alice@x.com"})

    assert response.status_code == 400


def test_current_user(client, make_user):
    user_id, headers = make_user("alice")

    response = client.get("/api/users/current", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"id": user_id, "username": "alice", "email": "alice@x.com"}


def test_current_user_without_token(client):
    response = client.get("/api/users/current")

    assert response.status_code == 401
    assert response.json()["message"] == "User is not authorized or token is missing"


def test_current_user_malformed_header(client, make_user):
    _, headers = make_user("alice")
    token = headers["Authorization"].split(" ", 1)[1]

    response = client.get("/api/users/current", headers={"Authorization": f"Token {token}"})

    assert response.status_code == 401


def test_current_user_bad_signature(client):
    token = create_access_token(
        "some-id", "mallory", "m@x.com", AuthConfig(token_secret="another-secret-of-enough-length")
    )

    response = client.get("/api/users/current", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_current_user_expired_token(client, config):
    token = create_access_token(
        "some-id",
        "alice",
        "alice@x.com",
        AuthConfig(token_secret=config.auth.token_secret, token_expire_minutes=-1),
    )

    response = client.get("/api/users/current", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Token expired"


def test_error_body_includes_stack_trace_outside_production(client):
    response = client.get("/api/users/current")

    assert "stackTrace" in response.json()


def test_production_error_body_omits_stack_trace(config):
    config.app.environment = "production"
    with TestClient(app=create_app(config=config, store=InMemoryStore())) as client:
        response = client.get("/api/users/current")

    assert response.status_code == 401
    assert set(response.json()) == {"title", "message"}
