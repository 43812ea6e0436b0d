"""E2E tests for authentication endpoints."""

from tests.factories import PASSWORD, bearer, register_via_api
from tests.harness import create_client_fixture

client = create_client_fixture()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_returns_token_and_sets_cookie(client):
    response = client.post(
        "/auth/register",
        json={"username": "alice", "email": "alice@example.com", "password": PASSWORD},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["token"]
    assert body["data"]["user"]["username"] == "alice"
    assert "passwordHash" not in body["data"]["user"]
    assert body["data"]["user"]["emailNotifications"] is True
    assert "auth_token" in response.cookies


def test_duplicate_registration(client):
    register_via_api(client, "alice")

    response = client.post(
        "/auth/register",
        json={"username": "alice", "email": "alice@example.com", "password": PASSWORD},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "User already exists"}


def test_login_and_me(client):
    registered = register_via_api(client, "alice")

    response = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
    )
    assert response.status_code == 200
    token = response.json()["data"]["token"]

    me = client.get("/auth/me", headers=bearer(token))
    assert me.status_code == 200
    assert me.json()["data"]["id"] == registered["user"]["id"]
    assert me.json()["data"]["email"] == "alice@example.com"


def test_wrong_password(client):
    register_via_api(client, "alice")

    response = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "wrong-one"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


def test_me_requires_token(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Not authorized to access this route",
    }


def test_me_rejects_bad_token(client):
    response = client.get("/auth/me", headers=bearer("not-a-jwt"))

    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized, token failed"


def test_cookie_authenticates_and_logout_clears_it(client):
    register_via_api(client, "alice")

    assert client.get("/auth/me").status_code == 200

    logout = client.post("/auth/logout")
    assert logout.json() == {"success": True, "data": "Successfully logged out"}
    assert client.get("/auth/me").status_code == 401


def test_update_profile(client):
    alice = register_via_api(client, "alice")

    response = client.put(
        "/auth/profile",
        json={
            "bio": "hi",
            "website": "https://alice.dev",
            "preferences": {"emailNotifications": False},
        },
        headers=bearer(alice["token"]),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["bio"] == "hi"
    assert data["website"] == "https://alice.dev"
    assert data["username"] == "alice"
    assert data["emailNotifications"] is False
    assert data["pushNotifications"] is True

    me = client.get("/auth/me", headers=bearer(alice["token"])).json()["data"]
    assert me["bio"] == "hi"


def test_update_profile_rejects_taken_username(client):
    alice = register_via_api(client, "alice")
    register_via_api(client, "bob")

    response = client.put(
        "/auth/profile", json={"username": "bob"}, headers=bearer(alice["token"])
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Username already taken"}


def test_update_profile_requires_token(client):
    client.cookies.clear()

    response = client.put("/auth/profile", json={"bio": "hi"})

    assert response.status_code == 401


def test_change_password(client):
    alice = register_via_api(client, "alice")

    response = client.put(
        "/auth/change-password",
        json={"currentPassword": PASSWORD, "newPassword": "brand-new-pass"},
        headers=bearer(alice["token"]),
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": "Password changed successfully"}
    old = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
    )
    assert old.status_code == 401
    new = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "brand-new-pass"}
    )
    assert new.status_code == 200


def test_change_password_with_wrong_current_password(client):
    alice = register_via_api(client, "alice")

    response = client.put(
        "/auth/change-password",
        json={"currentPassword": "not-my-password", "newPassword": "brand-new-pass"},
        headers=bearer(alice["token"]),
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Current password is incorrect"}
