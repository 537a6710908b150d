import pytest
from google.auth import exceptions as google_exceptions

from app.services import google_auth
from app.services.google_auth import (
    GoogleIdentityVerifier,
    IdentityProviderUnavailable,
    IdentityVerificationError,
    ThirdPartyProfile,
)
from conftest import fetch_user, signup_and_login

PROFILE = ThirdPartyProfile(
    subject="1234567890",
    email="g@x.com",
    display_name="Gina",
    image_url="https://example.com/g.png",
)


def test_first_login_creates_member_account(client, verifier):
    verifier.profiles["good-token"] = PROFILE

    response = client.post("/auth/login-with-third", json={"idToken": "good-token", "type": "GOOGLE"})
    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["token_third"] is None
    assert body["userData"]["role"] == "member"
    assert body["userData"]["displayName"] == "Gina"
    assert body["userData"]["imageUrl"] == "https://example.com/g.png"

    stored = fetch_user("g@x.com")
    assert stored.status == 1
    # placeholder secret, not a bcrypt hash
    assert stored.password and not stored.password.startswith("$2")
    assert len(stored.password) <= 100


def test_second_login_reuses_account(client, verifier):
    verifier.profiles["good-token"] = PROFILE
    first = client.post("/auth/login-with-third", json={"idToken": "good-token", "type": "GOOGLE"})
    second = client.post("/auth/login-with-third", json={"idToken": "good-token", "type": "GOOGLE"})

    assert first.json()["userData"]["id"] == second.json()["userData"]["id"]
    headers = {"Authorization": f"Bearer {second.json()['token']}"}
    count = client.get("/users/count", params={"where": '{"email": "g@x.com"}'}, headers=headers)
    assert count.json() == {"count": 1}


def test_existing_local_account_is_reused(client, verifier):
    signup_and_login(client, email="g@x.com", password="p1", display_name="Local Gina")
    verifier.profiles["good-token"] = PROFILE

    response = client.post("/auth/login-with-third", json={"idToken": "good-token", "type": "GOOGLE"})
    assert response.status_code == 200
    assert response.json()["userData"]["displayName"] == "Local Gina"


def test_unsupported_type_fails_before_verification(client, verifier):
    response = client.post("/auth/login-with-third", json={"idToken": "t", "type": "FACEBOOK"})
    assert response.status_code == 400
    assert verifier.calls == 0


def test_verification_failure_is_expectation_failed(client):
    response = client.post("/auth/login-with-third", json={"idToken": "forged", "type": "GOOGLE"})
    assert response.status_code == 417
    message = response.json()["error"]["message"]
    assert message.startswith("Error verifying token : ")
    assert "signature" in message


def test_token_without_subject_is_not_found(client, verifier):
    verifier.profiles["empty"] = ThirdPartyProfile(None, None, None, None)
    response = client.post("/auth/login-with-third", json={"idToken": "empty", "type": "GOOGLE"})
    assert response.status_code == 404


def test_soft_deleted_account_is_unauthorized(client, verifier):
    token = signup_and_login(client, email="g@x.com", password="p1")
    client.delete("/auth/delete-account", headers={"Authorization": f"Bearer {token}"})
    verifier.profiles["good-token"] = PROFILE

    response = client.post("/auth/login-with-third", json={"idToken": "good-token", "type": "GOOGLE"})
    assert response.status_code == 401


def test_verifier_passes_configured_audiences(monkeypatch):
    captured = {}

    def fake_verify(token, request, audience=None):
        captured["audience"] = audience
        captured["timeout"] = request.timeout
        return {"sub": "42", "email": "g@x.com", "name": "Gina", "picture": None}

    monkeypatch.setattr(google_auth.id_token, "verify_oauth2_token", fake_verify)
    verifier = GoogleIdentityVerifier(["client-a", "client-b"], timeout=3)

    profile = verifier.verify("token")
    assert captured == {"audience": ["client-a", "client-b"], "timeout": 3}
    assert profile == ThirdPartyProfile("42", "g@x.com", "Gina", None)


def test_verifier_wraps_rejections(monkeypatch):
    def fake_verify(token, request, audience=None):
        raise ValueError("Token has wrong audience")

    monkeypatch.setattr(google_auth.id_token, "verify_oauth2_token", fake_verify)
    with pytest.raises(IdentityVerificationError, match="wrong audience"):
        GoogleIdentityVerifier(["client-a"]).verify("token")


def test_verifier_reports_transport_failures(monkeypatch):
    def fake_verify(token, request, audience=None):
        raise google_exceptions.TransportError("timed out")

    monkeypatch.setattr(google_auth.id_token, "verify_oauth2_token", fake_verify)
    with pytest.raises(IdentityProviderUnavailable):
        GoogleIdentityVerifier(["client-a"]).verify("token")


def test_provider_outage_is_service_unavailable(client, verifier, monkeypatch):
    def unavailable(token):
        raise IdentityProviderUnavailable("timed out")

    monkeypatch.setattr(verifier, "verify", unavailable)
    response = client.post("/auth/login-with-third", json={"idToken": "t", "type": "GOOGLE"})
    assert response.status_code == 503
