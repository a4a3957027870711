import json
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("GEMINI_API_KEY", "")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from app.core.config import Base, get_db
from app.services.completion import CompletionClient, companion_service


# =====================================================================
# DATABASE
# =====================================================================

@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =====================================================================
# COMPLETION SERVICE
# =====================================================================

class FakeGemini:
    """
    Stand-in for the generateContent endpoint.

    Queue replies in ``replies``: a string is returned as the generated text,
    an int is returned as an error status. With an empty queue every call
    answers ``default_reply``.
    """

    def __init__(self):
        self.replies = []
        self.default_reply = "I hear you. What feels most important right now?"
        self.requests = []

    def queue(self, *replies):
        self.replies.extend(replies)

    @property
    def prompts(self):
        return [r["contents"][0]["parts"][0]["text"] for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        reply = self.replies.pop(0) if self.replies else self.default_reply
        if isinstance(reply, int):
            return httpx.Response(reply, json={"error": {"code": reply}})
        return httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": reply}]}}]}
        )


@pytest.fixture
def gemini():
    fake = FakeGemini()
    original = companion_service.client
    companion_service.client = CompletionClient(
        api_key="test-key", transport=httpx.MockTransport(fake)
    )
    yield fake
    companion_service.client = original


# =====================================================================
# AUTH
# =====================================================================

@pytest.fixture
def register_user(client):
    def register(email="sam@example.com", password="calmwaters1", display_name="Sam"):
        response = client.post(
            "/auth/register",
            json={"email": email, "password": password, "display_name": display_name},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return register


@pytest.fixture
def auth_headers(register_user):
    tokens = register_user()
    return {"Authorization": f"Bearer {tokens['access_token']}"}
