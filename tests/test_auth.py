from datetime import timedelta

import jwt

from app.core.config import ALGORITHM, SECRET_KEY
from app.utils.auth import create_access_token, verify_password
from conftest import fetch_user, signup_and_login


def test_signup_login_delete_scenario(client):
    response = client.post("/auth/signup", json={"email": "a@x.com", "password": "p1"})
    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "a@x.com"
    assert body["status"] == 1
    assert body["role"] == "member"
    assert "password" not in body

    stored = fetch_user("a@x.com")
    assert stored.password != "p1"
    assert verify_password("p1", stored.password)

    response = client.post("/auth/login", json={"email": "a@x.com", "password": "p1"})
    assert response.status_code == 200
    token = response.json()["token"]
    assert token
    assert response.json()["userData"]["token"] == token

    response = client.post("/auth/login", json={"email": "a@x.com", "password": "wrong"})
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"

    response = client.delete("/auth/delete-account", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json() == {"message": "SUCCESS"}

    stored = fetch_user("a@x.com")
    assert stored.status == 0
    assert stored.status_deleted == 1
    assert stored.deleted_at is not None
    assert stored.user_deleted["email"] == "a@x.com"

    response = client.post("/auth/login", json={"email": "a@x.com", "password": "p1"})
    assert response.status_code == 404


def test_login_unknown_user_is_not_found(client):
    response = client.post("/auth/login", json={"email": "ghost@x.com", "password": "p1"})
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "User not found"


def test_signup_duplicate_email_conflicts(client):
    client.post("/auth/signup", json={"email": "a@x.com", "password": "p1"})
    response = client.post("/auth/signup", json={"email": "a@x.com", "password": "p2"})
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


def test_signup_duplicate_check_includes_soft_deleted_accounts(client):
    token = signup_and_login(client)
    client.delete("/auth/delete-account", headers={"Authorization": f"Bearer {token}"})

    response = client.post("/auth/signup", json={"email": "a@x.com", "password": "p1"})
    assert response.status_code == 409


def test_signup_without_password_creates_passwordless_account(client):
    response = client.post("/auth/signup", json={"email": "nopass@x.com", "password": ""})
    assert response.status_code == 200
    assert fetch_user("nopass@x.com").password is None

    response = client.post("/auth/login", json={"email": "nopass@x.com", "password": "anything"})
    assert response.status_code == 404


def test_signup_rejects_unknown_properties(client):
    response = client.post("/auth/signup", json={"email": "a@x.com", "nickname": "al"})
    assert response.status_code == 422


def test_generated_password_login_compares_stored_value(client):
    client.post("/auth/signup", json={"email": "a@x.com", "password": "p1"})
    stored_hash = fetch_user("a@x.com").password

    response = client.post(
        "/auth/login",
        json={"email": "a@x.com", "password": stored_hash, "generatedPassword": True},
    )
    assert response.status_code == 200

    response = client.post(
        "/auth/login",
        json={"email": "a@x.com", "password": "p1", "generatedPassword": True},
    )
    assert response.status_code == 404


def test_verify_refreshes_token(client):
    token = signup_and_login(client)
    response = client.get("/auth/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["userData"]["email"] == "a@x.com"
    assert "otp" not in body["userData"]


def test_verify_requires_bearer_token(client):
    response = client.get("/auth/verify")
    assert response.status_code == 401

    response = client.get("/auth/verify", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid token"


def test_expired_token_is_rejected(client):
    signup_and_login(client)
    user = fetch_user("a@x.com")
    token = create_access_token(user, expires_delta=timedelta(seconds=-10))

    response = client.get("/auth/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Token has expired"


def test_valid_token_for_deleted_account_is_not_found(client):
    token = signup_and_login(client)
    headers = {"Authorization": f"Bearer {token}"}
    client.delete("/auth/delete-account", headers=headers)

    response = client.get("/auth/verify", headers=headers)
    assert response.status_code == 404


def test_token_claims(client):
    token = signup_and_login(client)
    claims = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    user = fetch_user("a@x.com")
    assert claims["sub"] == str(user.id)
    assert claims["email"] == "a@x.com"
    assert claims["name"] == "Alice"
    assert claims["exp"] - claims["iat"] == 360000


def test_edit_profile_updates_and_stamps(client):
    token = signup_and_login(client)
    headers = {"Authorization": f"Bearer {token}"}

    response = client.post(
        "/auth/edit-profile",
        json={"displayName": "Alice B", "imageUrl": "", "password": "p2"},
        headers=headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["displayName"] == "Alice B"
    assert body["updatedAt"] is not None
    # snapshot is taken from the account before the edit
    assert body["userUpdated"]["displayName"] == "Alice"
    assert "password" not in body["userUpdated"]

    assert client.post("/auth/login", json={"email": "a@x.com", "password": "p2"}).status_code == 200


def test_edit_profile_email_collision(client):
    signup_and_login(client, email="b@x.com", password="p1")
    token = signup_and_login(client, email="a@x.com", password="p1")
    headers = {"Authorization": f"Bearer {token}"}

    response = client.post("/auth/edit-profile", json={"email": "b@x.com"}, headers=headers)
    assert response.status_code == 409

    response = client.post("/auth/edit-profile", json={"email": "a@x.com"}, headers=headers)
    assert response.status_code == 200


def test_signup_ignores_status_deleted(client):
    response = client.post("/auth/signup", json={"email": "x@x.com", "password": "p1", "statusDeleted": 1})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == 1
    assert body["statusDeleted"] == 0
    assert body["deletedAt"] is None


def test_edit_profile_rejects_null_email(client):
    token = signup_and_login(client)
    headers = {"Authorization": f"Bearer {token}"}

    response = client.post("/auth/edit-profile", json={"email": None}, headers=headers)
    assert response.status_code == 422
    assert fetch_user("a@x.com") is not None
