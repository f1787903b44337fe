"""
Shared pytest fixtures and configuration for all tests
"""
import pytest
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import httpx

# Add backend to Python path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

VALID_IMAGE_DATA = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
VALID_TOKEN = "valid-token"
TEST_USER_ID = "user-123"


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Provide a complete configuration through the environment"""
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.test")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
    monkeypatch.setenv("LOVABLE_API_KEY", "test-lovable-key")
    monkeypatch.setenv("AI_GATEWAY_URL", "https://gateway.test/v1/chat/completions")
    monkeypatch.setenv("AI_MODEL", "google/gemini-2.5-flash-image-preview")


@pytest.fixture(autouse=True)
def clear_history_cache():
    from core import cache
    cache.clear_all()
    yield
    cache.clear_all()


@pytest.fixture
def valid_payload():
    return {"imageData": VALID_IMAGE_DATA, "instruction": "Make it black and white"}


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}


@pytest.fixture
def mock_supabase_auth():
    """Patch the auth client: VALID_TOKEN resolves to a user, anything else is rejected"""
    def get_user(token):
        if token == VALID_TOKEN:
            return SimpleNamespace(user=SimpleNamespace(id=TEST_USER_ID))
        raise Exception("invalid JWT")

    supabase = MagicMock()
    supabase.auth.get_user.side_effect = get_user
    with patch("core.auth.get_supabase", return_value=supabase):
        yield supabase


@pytest.fixture
def app():
    from main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Provide FastAPI test client"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def gateway(app):
    """
    Route AI gateway calls through an httpx.MockTransport.

    Set ``gateway.response`` to the httpx.Response to return; every request
    sent is appended to ``gateway.requests``.
    """
    from fastapi import Depends
    from api.image_edit import get_ai_gateway_service
    from config.settings import Settings, get_settings
    from services.ai_gateway_service import AIGatewayService

    state = SimpleNamespace(requests=[], response=httpx.Response(200, json={}))

    def handler(request: httpx.Request) -> httpx.Response:
        state.requests.append(request)
        return state.response

    def override(settings: Settings = Depends(get_settings)) -> AIGatewayService:
        return AIGatewayService(settings, transport=httpx.MockTransport(handler))

    app.dependency_overrides[get_ai_gateway_service] = override
    return state


def completion_with_image(url: str) -> dict:
    return {
        "choices": [{
            "message": {
                "role": "assistant",
                "content": "Here is your edited image.",
                "images": [{"type": "image_url", "image_url": {"url": url}}]
            }
        }]
    }
