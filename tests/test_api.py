"""Tests for the event HTTP API."""
import pytest
from httpx import AsyncClient, ASGITransport
from provider_adapter.main import app
from provider_adapter.config import get_settings

settings = get_settings()


@pytest.mark.asyncio
async def test_handle_event_posts_response():
    """Test an accepted event is dispatched and its response listed."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/v1/events",
            json={"corr_id": "corr-identitet-1", "org_id": "example.no", "action": "GET_ALL_IDENTITET"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data == {"corr_id": "corr-identitet-1", "status": "ADAPTER_RESPONSE", "posted": True}
        assert "x-correlation-id" in response.headers

        listed = await client.get("/v1/responses", params={"limit": 50})
        assert listed.status_code == 200
        events = [e for e in listed.json()["events"] if e["corr_id"] == "corr-identitet-1"]
        assert len(events) == 1
        assert [r["system_id"] for r in events[0]["data"]] == ["BATMAN", "ROBIN"]


@pytest.mark.asyncio
async def test_handle_unknown_action_rejected():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/v1/events", json={"action": "UNKNOWN_ACTION"})
        assert response.status_code == 200
        assert response.json()["status"] == "ADAPTER_REJECTED"


@pytest.mark.asyncio
async def test_handle_unknown_action_strict(monkeypatch):
    """Test strict mode surfaces unknown actions as 422."""
    monkeypatch.setattr(app.state.dispatcher, "strict_actions", True)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/v1/events", json={"action": "UNKNOWN_ACTION"})
        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "HTTPException"
        assert "UNKNOWN_ACTION" in data["message"]
        assert data["status_code"] == 422
        assert data["path"] == "/v1/events"
        assert data["correlation_id"] == response.headers["x-correlation-id"]


@pytest.mark.asyncio
async def test_health_check_event():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/v1/events", json={"corr_id": "hc-1", "health_check": True})
        assert response.json() == {"corr_id": "hc-1", "status": "TEMP_UPSTREAM_QUEUE", "posted": True}


@pytest.mark.asyncio
async def test_not_accepted_event_reports_not_posted(monkeypatch):
    monkeypatch.setattr(app.state.dispatcher.verifier, "org_ids", {"example.no"})
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/v1/events",
            json={"corr_id": "corr-other", "org_id": "other.no", "action": "GET_ALL_IDENTITET"},
        )
        assert response.status_code == 200
        assert response.json() == {"corr_id": "corr-other", "status": None, "posted": False}


@pytest.mark.asyncio
async def test_invalid_event_rejected():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/v1/events", json={"status": "NOT_A_STATUS"})
        assert response.status_code == 422


@pytest.mark.asyncio
async def test_oversized_event_rejected():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/v1/events",
            json={"action": "GET_ALL_IDENTITET", "query": "x" * (settings.MAX_EVENT_SIZE + 100)},
        )
        assert response.status_code == 413
        assert response.json()["message"] == "Event too large"


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, -1, 1001])
async def test_list_responses_limit_out_of_range(limit):
    """Test the response listing rejects limits outside 1..1000."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/v1/responses", params={"limit": limit})
        assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_responses_limit_respected():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        for _ in range(3):
            await client.post("/v1/events", json={"action": "GET_ALL_RETTIGHET"})
        response = await client.get("/v1/responses", params={"limit": 2})
        assert response.status_code == 200
        assert response.json()["total"] == 2
