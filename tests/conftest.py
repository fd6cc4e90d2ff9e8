"""
Pytest configuration and fixtures
"""
import json
from unittest.mock import MagicMock, patch

import pytest

from fake_firestore import FakeFirestore
from game_catalog import get_profiling_game_ids

SIGNUP_PAYLOAD = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@example.com",
    "password": "analytical",
    "birthDate": "1990-12-10",
    "sex": "2",
}


def gemini_response(payload):
    """A stand-in for a GenerateContentResponse carrying JSON text."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return MagicMock(text=text, prompt_feedback=None)


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def app(db):
    from app import app as flask_app
    from auth_utils import limiter

    flask_app.config.update(TESTING=True, FIRESTORE_DB=db, JWT_SECRET_KEY="test-secret-key-that-is-long-enough-for-hs256")
    limiter.enabled = False
    yield flask_app
    limiter.enabled = True


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def user_id(client):
    response = client.post("/signup", json=SIGNUP_PAYLOAD)
    assert response.status_code == 201
    return response.get_json()["id"]


@pytest.fixture
def auth_headers(client, user_id):
    response = client.post("/login", json={"email": SIGNUP_PAYLOAD["email"], "password": SIGNUP_PAYLOAD["password"]})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.get_json()['access_token']}"}


@pytest.fixture
def gemini(monkeypatch):
    """
    Patches the Gemini client. Set gemini.generate_content.side_effect to a
    list of responses (see gemini_response) for the calls a test expects.
    """
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    model = MagicMock()
    with patch("ai_utils.genai.configure"), patch("ai_utils.genai.GenerativeModel", return_value=model):
        yield model


@pytest.fixture
def profiling_activities():
    return [
        {"id": f"a{i}", "gameId": game_id, "gameTitle": game_id.title(), "score": 70 + i, "activityDuration": 60, "timestamp": f"2024-05-0{i + 1}T10:00:00+00:00"}
        for i, game_id in enumerate(get_profiling_game_ids())
    ]


def full_mappings(score=50):
    from game_catalog import INTELLIGENCE_IDS
    return {"intelligenceMappings": [
        {"intelligence": intelligence, "score": score, "reasoning": f"{intelligence} reasoning"}
        for intelligence in INTELLIGENCE_IDS
    ]}


INSIGHTS_OUTPUT = {
    "multipleIntelligencesSummary": "Strong logical profile.",
    "broaderCognitiveInsights": "Consistent focus across sessions.",
    "actionableRecommendations": "Play more Melody Mayhem.",
}
