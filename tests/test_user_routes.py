# tests/test_user_routes.py

from __future__ import annotations

import uuid

import jwt
from fastapi.testclient import TestClient

from .helpers import TEST_JWT


def test_register_returns_created_user_without_hash(client: TestClient) -> None:
    response = client.post(
        "/users/register",
        json={"name": "Linus", "email": "linus@example.com", "password": "penguin"},
    )
    assert response.status_code == 201
    data = response.json()
    assert set(data) == {"id", "name", "email"}
    assert data["email"] == "linus@example.com"
    assert response.headers["location"].endswith(f"/users/{data['id']}")


def test_register_accepts_legacy_password_hash_field(client: TestClient) -> None:
    body = {"name": "Old", "email": "old@example.com", "passwordHash": "legacy"}
    assert client.post("/users/register", json=body).status_code == 201

    login = client.post("/users/login", json={"email": "old@example.com", "password": "legacy"})
    assert login.status_code == 200


def test_register_with_blank_email_is_rejected(client: TestClient) -> None:
    response = client.post("/users/register", json={"name": "x", "email": "", "password": "y"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Email is required"}


def test_register_duplicate_email_is_a_server_error(client: TestClient) -> None:
    body = {"name": "A", "email": "a@b.com", "password": "one"}
    assert client.post("/users/register", json=body).status_code == 201

    response = client.post("/users/register", json={**body, "password": "two"})
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_login_returns_signed_token(client: TestClient, registered_user: dict) -> None:
    response = client.post(
        "/users/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["userId"] == registered_user["id"]
    assert data["email"] == registered_user["email"]

    claims = jwt.decode(
        data["token"],
        TEST_JWT.secret_key,
        algorithms=["HS256"],
        audience=TEST_JWT.audience,
        issuer=TEST_JWT.issuer,
    )
    assert claims["sub"] == registered_user["id"]


def test_login_failures_look_the_same(client: TestClient, registered_user: dict) -> None:
    wrong_password = client.post(
        "/users/login", json={"email": registered_user["email"], "password": "nope"}
    )
    unknown_email = client.post(
        "/users/login", json={"email": "ghost@example.com", "password": registered_user["password"]}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"detail": "Invalid credentials"}


def test_get_user_by_id(client: TestClient, registered_user: dict, auth_headers: dict) -> None:
    response = client.get(f"/users/{registered_user['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == registered_user["email"]

    missing = client.get(f"/users/{uuid.uuid4()}", headers=auth_headers)
    assert missing.status_code == 404
    assert missing.content == b""


def test_get_user_requires_token(client: TestClient, registered_user: dict) -> None:
    assert client.get(f"/users/{registered_user['id']}").status_code == 401


def test_login_without_auth_returns_user(open_client: TestClient) -> None:
    open_client.post(
        "/users/register", json={"name": "Open", "email": "open@example.com", "password": "pw"}
    )

    response = open_client.post("/users/login", json={"email": "open@example.com", "password": "pw"})
    assert response.status_code == 200
    assert response.json()["email"] == "open@example.com"
    assert "token" not in response.json()


def test_root_and_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["version"] == "1.0.0"


def test_padded_email_can_log_in_as_registered(client: TestClient) -> None:
    body = {"name": "Pad", "email": " x@y.com ", "password": "pw"}
    assert client.post("/users/register", json=body).status_code == 201

    response = client.post("/users/login", json={"email": " x@y.com ", "password": "pw"})
    assert response.status_code == 200
    assert response.json()["email"] == "x@y.com"
