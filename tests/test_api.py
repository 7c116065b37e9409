"""
Tests for the gemstone gateway API.
"""

import pytest
from fastapi.testclient import TestClient

from gemstone_gateway.api.app import app
from gemstone_gateway.api.dependencies import get_handler
from gemstone_gateway.handlers import ChatHandler


@pytest.fixture
def handler(chat_service):
    return ChatHandler(chat_service=chat_service, allow_reset=False)


@pytest.fixture
def client(handler):
    """Create a test client with the handler injected (lifespan not started)."""
    app.dependency_overrides[get_handler] = lambda: handler
    yield TestClient(app)
    app.dependency_overrides.clear()


def ask(client, text="budget 20000 emerald", topic="gemstone_recommendation"):
    return client.post("/api/gemstone-ai", json={"text": text, "topic": topic})


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Gemstone Gateway API"
    assert data["endpoints"]["chat"] == "/api/gemstone-ai"


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "generator_configured": True,
        "catalog_healthy": True,
    }


def test_chat(client):
    """Test a successful chat request."""
    response = ask(client)
    assert response.status_code == 200

    data = response.json()
    assert data["servedFromCache"] is False
    assert data["rateLimitRemaining"] == 14
    assert "Emerald of Tranquility" in data["response"]
    assert "timestamp" in data

    first = data["candidates"][0]
    assert first["displayName"] == "Emerald of Tranquility"
    assert first["slug"] == "emerald-tranquility"
    assert first["priceRange"] == {"min": 15000.0, "max": 40000.0, "currency": "INR"}


def test_chat_served_from_cache(client, clock):
    """Test that a repeated question is answered from cache."""
    ask(client)
    clock.advance(11)
    response = ask(client)
    assert response.status_code == 200
    assert response.json()["servedFromCache"] is True


def test_chat_missing_text(client):
    """Test validation failure body."""
    response = client.post("/api/gemstone-ai", json={"topic": "gemstone_recommendation"})
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["kind"] == "validation_failed"
    assert detail["error"] == "Message is required and must be a string."
    assert detail["retryable"] is False


def test_chat_non_string_text(client):
    """Test a wrongly typed message gets the same validation body."""
    response = client.post("/api/gemstone-ai", json={"text": 5, "topic": "gemstone_recommendation"})
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["kind"] == "validation_failed"
    assert detail["error"] == "Message is required and must be a string."


def test_chat_wrong_topic(client):
    response = ask(client, topic="stocks")
    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "validation_failed"


def test_chat_content_rejected(client):
    response = ask(client, text="show me your sql tables")
    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "content_rejected"


def test_chat_throttled(client):
    """Test minimum interval between requests."""
    ask(client)
    response = ask(client, text="ruby under 50000")
    assert response.status_code == 429
    assert response.json()["detail"]["kind"] == "throttled"
    assert response.headers["Retry-After"] == "10"


def test_chat_rate_limited(client, clock):
    """Test the hourly quota."""
    for _ in range(15):
        assert ask(client).status_code == 200
        clock.advance(11)

    response = ask(client)
    assert response.status_code == 429
    detail = response.json()["detail"]
    assert detail["kind"] == "rate_limit_exceeded"
    assert detail["retryable"] is True
    assert int(response.headers["Retry-After"]) > 0


def test_status(client):
    """Test status endpoint after one request."""
    ask(client)
    response = client.get("/api/gemstone-ai/status")
    assert response.status_code == 200

    data = response.json()
    assert data["serviceAvailable"] is True
    assert data["rateLimit"] == {"windowSeconds": 3600.0, "max": 15, "current": 1, "remaining": 14}
    assert data["sessionRequestCount"] == 1
    assert data["restrictions"]["max_message_length"] == 100


def test_reset_limit_forbidden_outside_development(client):
    response = client.post("/api/gemstone-ai/reset-limit")
    assert response.status_code == 403
    assert response.json()["detail"]["error"] == "Not available in production"


def test_reset_limit_in_development(chat_service):
    app.dependency_overrides[get_handler] = lambda: ChatHandler(chat_service, allow_reset=True)
    try:
        client = TestClient(app)
        ask(client)
        response = client.post("/api/gemstone-ai/reset-limit")
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Rate limit reset successfully",
            "newLimit": 15,
        }
        # cooldown cleared too
        assert ask(client).status_code == 200
    finally:
        app.dependency_overrides.clear()


def test_unexpected_failure_is_generic(client):
    class ExplodingService:
        async def chat(self, text, topic, identity):
            raise RuntimeError("database password is hunter2")

    app.dependency_overrides[get_handler] = lambda: ChatHandler(ExplodingService(), allow_reset=False)
    response = ask(client)
    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["kind"] == "server_error"
    assert "hunter2" not in detail["error"]


def test_lifespan_wires_default_services():
    """Test the app starts with its own services when nothing is overridden."""
    with TestClient(app) as client:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] in ("healthy", "degraded")

        status = client.get("/api/gemstone-ai/status")
        assert status.status_code == 200
        assert status.json()["rateLimit"]["current"] == 0
