"""
Integration Tests for the FastAPI Surface

Uses async httpx against the ASGI app; the Gemini endpoint is a MockTransport.
"""
import httpx
import pytest

from weather_chat.main import create_app


@pytest.fixture
def gemini_ok(make_client, gemini_reply):
    client, transport = make_client(
        lambda r: httpx.Response(200, json=gemini_reply("**Start before 9am.** Have fun!"))
    )
    return client, transport


@pytest.fixture
async def async_client(gemini_ok):
    """Create async test client."""
    app = create_app(client=gemini_ok[0])
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client


@pytest.mark.asyncio
class TestReferenceEndpoints:
    """Tests for health and static reference endpoints."""

    async def test_health(self, async_client):
        """Test /health endpoint.
test_thresholds"""
        response = await async_client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["assistant_available"] is True

    async def test_thresholds(self, async_client):
        """Test threshold reference table is served in condition order."""
        response = await async_client.get("/api/v1/thresholds")
        assert response.status_code == 200

        titles = [row["title"] for row in response.json()]
        assert titles == ["Very Hot", "Very Cold", "Very Windy", "Very Wet", "Very Uncomfortable"]

    async def test_suggestions(self, async_client):
        """Test quick suggestions endpoint."""
        response = await async_client.get("/api/v1/suggestions")
        assert response.status_code == 200
        assert len(response.json()) == 4


@pytest.mark.asyncio
class TestConversationEndpoints:
    """Tests for starting a conversation and submitting turns."""

    async def test_no_conversation_yet(self, async_client):
        """Test 404 before any analysis is posted."""
        response = await async_client.get("/api/v1/conversation")
        assert response.status_code == 404

        response = await async_client.post("/api/v1/conversation/messages", json={"text": "hi"})
        assert response.status_code == 404

    async def test_start_conversation(self, async_client, analysis_payload):
        """Test posting an analysis returns the opening message."""
        response = await async_client.post("/api/v1/conversation", json=analysis_payload)
        assert response.status_code == 200

        data = response.json()
        assert data["awaiting_reply"] is False
        assert len(data["messages"]) == 1
        assert data["messages"][0]["sender"] == "assistant"
        assert "Very Hot" in data["messages"][0]["content"]

    async def test_invalid_analysis_rejected(self, async_client, analysis_payload):
        """Test out-of-range probability returns 422."""
        analysis_payload["probabilities"]["veryHot"] = 1.5
        response = await async_client.post("/api/v1/conversation", json=analysis_payload)

        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_INPUT"

    async def test_submit_turn(self, async_client, analysis_payload, gemini_ok):
        """Test a turn returns the Gemini text."""
        await async_client.post("/api/v1/conversation", json=analysis_payload)

        response = await async_client.post(
            "/api/v1/conversation/messages", json={"text": "When should we start?"}
        )
        assert response.status_code == 200

        data = response.json()
        assert data["accepted"] is True
        assert [m["sender"] for m in data["messages"]] == ["assistant", "user", "assistant"]
        assert data["messages"][-1]["content"] == "**Start before 9am.** Have fun!"
        assert len(gemini_ok[1].requests) == 1

    async def test_blank_submit_not_accepted(self, async_client, analysis_payload):
        """Test whitespace-only text is ignored."""
        await async_client.post("/api/v1/conversation", json=analysis_payload)

        response = await async_client.post("/api/v1/conversation/messages", json={"text": "   "})

        data = response.json()
        assert data["accepted"] is False
        assert len(data["messages"]) == 1


@pytest.mark.asyncio
async def test_fallback_through_api(make_client, analysis_payload):
    """A failing Gemini endpoint still yields an assistant reply."""
    client, _ = make_client(lambda r: httpx.Response(503, text="unavailable"))
    app = create_app(client=client)

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as http:
        await http.post("/api/v1/conversation", json=analysis_payload)
        response = await http.post("/api/v1/conversation/messages", json={"text": "Plan B?"})

    data = response.json()
    assert response.status_code == 200
    assert data["accepted"] is True
    assert "unable" in data["messages"][-1]["content"]
    assert "Phoenix, AZ" in data["messages"][-1]["content"]
