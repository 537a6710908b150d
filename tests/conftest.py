import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from main import app
from app.db.base import Base
from app.db.get_db import SessionLocal, engine
from app.models.user import User
from app.services.google_auth import IdentityVerificationError, get_identity_verifier
from app.services.mailer import MailDeliveryError, get_mailer


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.fail = False

    def send_email(self, to_email, subject, text):
        if self.fail:
            raise MailDeliveryError("relay down")
        self.sent.append({"to": to_email, "subject": subject, "text": text})


class FakeVerifier:
    """Maps id tokens to profiles; anything else is rejected like a bad signature."""

    def __init__(self):
        self.profiles = {}
        self.calls = 0

    def verify(self, token):
        self.calls += 1
        if token not in self.profiles:
            raise IdentityVerificationError("Could not verify token signature.")
        return self.profiles[token]


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def client(mailer, verifier):
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_identity_verifier] = lambda: verifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def fetch_user(email):
    db = SessionLocal()
    try:
        return db.query(User).filter(User.email == email).first()
    finally:
        db.close()


def signup_and_login(client, email="a@x.com", password="p1", display_name="Alice"):
    response = client.post(
        "/auth/signup",
        json={"email": email, "password": password, "displayName": display_name},
    )
    assert response.status_code == 200, response.text
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def auth_headers(client):
    token = signup_and_login(client, email="admin@x.com", password="secret", display_name="Admin")
    return {"Authorization": f"Bearer {token}"}
