import pytest

from storyhub.routers.auth import admin_id_from_token, create_admin_token, get_password_hash, verify_password
from tests.conftest import ADMIN_HEADERS, ADMIN_PASSWORD, ADMIN_USERNAME

ADMIN_ROUTES = [
    ("get", "/api/submitted-stories"),
    ("put", "/api/submitted-stories/64b7f0c2a1b2c3d4e5f60718"),
    ("delete", "/api/submitted-stories/64b7f0c2a1b2c3d4e5f60718"),
    ("get", "/api/admin/comments"),
    ("get", "/api/admin/realtime-events"),
    ("get", "/api/users"),
    ("get", "/api/analytics"),
    ("post", "/api/stories"),
    ("delete", "/api/stories/64b7f0c2a1b2c3d4e5f60718"),
]


def login(client, username=ADMIN_USERNAME, password=ADMIN_PASSWORD):
    return client.post("/api/admin/login", json={"username": username, "password": password})


@pytest.mark.parametrize("method, path", ADMIN_ROUTES)
def test_admin_routes_require_token(client, method, path):
    kwargs = {"json": {}} if method in ("put", "post") else {}
    response = getattr(client, method)(path, **kwargs)

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_non_bearer_scheme_is_rejected(client):
    response = client.get("/api/users", headers={"Authorization": "Basic c3RvcnlhZG1pbg=="})
    assert response.status_code == 401


def test_any_bearer_token_is_accepted(client):
    response = client.get("/api/users", headers={"Authorization": "Bearer whatever"})
    assert response.status_code == 200


def test_login_returns_token(client):
    response = login(client)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert admin_id_from_token(body["token"])


@pytest.mark.parametrize("username, password", [
    (ADMIN_USERNAME, "wrong-password-1"),
    ("nobody", ADMIN_PASSWORD),
])
def test_login_with_bad_credentials(client, username, password):
    response = login(client, username, password)

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_login_is_rate_limited(client):
    for _ in range(5):
        login(client, password="wrong-password-1")

    assert login(client).status_code == 429


def test_change_password(client):
    token = login(client).json()["token"]

    response = client.post(
        "/api/admin/change-password",
        json={"oldPassword": ADMIN_PASSWORD, "newPassword": "new-secret-99"},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.json() == {"message": "Password changed successfully"}
    assert login(client).status_code == 401
    assert login(client, password="new-secret-99").status_code == 200


def test_change_password_with_wrong_old_password(client):
    response = client.post(
        "/api/admin/change-password",
        json={"oldPassword": "not-it-123", "newPassword": "new-secret-99"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Old password is incorrect."}


def test_change_password_rejects_weak_password(client):
    response = client.post(
        "/api/admin/change-password",
        json={"oldPassword": ADMIN_PASSWORD, "newPassword": "short"},
        headers=ADMIN_HEADERS,
    )
    assert response.status_code == 422


def test_password_helpers():
    hashed = get_password_hash("s3cret-value")
    assert verify_password("s3cret-value", hashed)
    assert not verify_password("other", hashed)
    assert not verify_password("s3cret-value", "plain-text-not-a-hash")
    assert not verify_password("s3cret-value", None)


def test_token_round_trip():
    assert admin_id_from_token(create_admin_token("abc123")) == "abc123"
    assert admin_id_from_token("admin-token-") is None
    assert admin_id_from_token("something-else") is None
