"""Shared test fixtures."""

import os

# Must be set before any fundtheworld module reads the settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = "test-key"
os.environ["SECRET_KEY"] = "test-secret"
os.environ.pop("IMGBB_API_KEY", None)

import pytest
from fastapi.testclient import TestClient

from fundtheworld.main import app
from fundtheworld.core.database import Base, SessionLocal, engine
from fundtheworld.services.openai_service import openai_service
from fundtheworld.services.organization_service import organization_service

from fakes import FakeOpenAIClient


@pytest.fixture(autouse=True)
def fresh_database():
    """Every test starts from empty tables and cold caches."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    organization_service.invalidate_cache()
    yield
    organization_service.invalidate_cache()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fake_openai(monkeypatch):
    """Scripted stand-in for the OpenAI client; queue responses on ``fake_openai.completions``."""
    fake = FakeOpenAIClient()
    monkeypatch.setattr(openai_service, "client", fake)
    return fake


def register_and_login(client, email, password="s3cret-pass"):
    client.post("/api/users/register", json={"email": email, "password": password})
    response = client.post("/api/users/login", json={"email": email, "password": password})
    token = response.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client, "donor@fundtheworld.org")


@pytest.fixture
def other_auth_headers(client):
    return register_and_login(client, "someone.else@fundtheworld.org")


@pytest.fixture
def sample_submission():
    return {
        "nickname": "clean-water-now",
        "title": "Clean Water Now",
        "mission": "Building wells and filtration systems for rural communities.",
        "fullContext": "Since 2012 we have drilled 300 wells across East Africa.",
        "tags": ["Health", "Water", "Environment"],
        "email": "hello@cleanwaternow.org",
        "bitcoinAddress": "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa",
        "location": "Nairobi, Kenya",
        "president": "Amina Otieno",
        "founder": "Joseph Kamau",
        "registrationNumber": "KE-2012-0042",
        "bgGradient": "from-blue-500 to-cyan-400",
        "startDate": "2012-03-01",
        "image": "https://i.ibb.co/abc/logo.png",
        "banner": "https://i.ibb.co/abc/banner.png",
        "website": "https://cleanwaternow.org",
        "customMessage": "Every satoshi counts.",
    }
