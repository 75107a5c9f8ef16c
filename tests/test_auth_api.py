from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import API_USER_EMAIL as EMAIL
from conftest import API_USER_PASSWORD as PASSWORD


def test_login_returns_user_and_tokens(client: TestClient) -> None:
    response = client.post("/api/login", json={"email": EMAIL, "password": PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User logged in successfully"
    assert body["data"]["email"] == EMAIL
    assert body["data"]["token_type"] == "bearer"
    assert body["data"]["token"]
    assert body["data"]["refresh_token"]


def test_login_with_bad_password_is_unauthorized(client: TestClient) -> None:
    response = client.post("/api/login", json={"email": EMAIL, "password": "nope"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_validates_payload(client: TestClient) -> None:
    response = client.post("/api/login", json={"email": "not-an-email", "password": ""})

    assert response.status_code == 422
    errors = response.json()["error"]
    assert "email" in errors
    assert "password" in errors


def test_current_user_and_refresh(client: TestClient) -> None:
    login = client.post("/api/login", json={"email": EMAIL, "password": PASSWORD}).json()["data"]
    headers = {"Authorization": f"Bearer {login['token']}"}

    me = client.get("/api/user", headers=headers)
    assert me.status_code == 200
    assert me.json()["data"] == {"id": login["id"], "name": "Translator", "email": EMAIL}

    refreshed = client.post(
        "/api/auth/token/refresh", json={"refresh_token": login["refresh_token"]}
    )
    assert refreshed.status_code == 200
    assert refreshed.json()["data"]["refresh_token"] != login["refresh_token"]

    replay = client.post("/api/auth/token/refresh", json={"refresh_token": login["refresh_token"]})
    assert replay.status_code == 401
