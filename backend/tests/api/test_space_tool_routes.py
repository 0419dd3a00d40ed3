"""Space Tool Routes — HTTP tests via httpx ASGITransport.

Tests cover:
    - Tool listing returns the current mode's definition
    - Tool calls answer 200 with CallToolResult framing plus the typed result
    - Bearer credentials reach the dispatcher
    - Malformed fields answer 200 in the body; non-object bodies get 400
    - Health and readiness checks
"""

import httpx
import pytest
from unittest.mock import AsyncMock

from dynamic_space.api.routes.space_tool import bearer_token, get_space_tool_dispatch
from dynamic_space.config import Settings
from dynamic_space.core.tool_result import ToolResult
from dynamic_space.main import app
from dynamic_space.services.tool_dispatch import SpaceToolDispatch


@pytest.fixture
def client():
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def override_dispatch():
    def install(dispatch):
        app.dependency_overrides[get_space_tool_dispatch] = lambda: dispatch
    yield install
    app.dependency_overrides.clear()


def test_bearer_token_parsing():
    assert bearer_token("Bearer hf_abc") == "hf_abc"
    assert bearer_token("bearer  hf_abc ") == "hf_abc"
    assert bearer_token("Basic xyz") is None
    assert bearer_token(None) is None


@pytest.mark.asyncio
async def test_list_tools_standard_mode(client):
    async with client:
        response = await client.get("/api/v1/tools/")
    tools = response.json()["tools"]
    assert response.status_code == 200
    assert len(tools) == 1
    assert tools[0]["name"] == "dynamic_space"
    assert "find" in tools[0]["inputSchema"]["properties"]["operation"]["enum"]


@pytest.mark.asyncio
async def test_list_tools_discover_mode(client, monkeypatch):
    monkeypatch.setenv("DYNAMIC_SPACE_DATA", "https://example.com/spaces.csv")
    async with client:
        response = await client.get("/api/v1/tools/")
    enum = response.json()["tools"][0]["inputSchema"]["properties"]["operation"]["enum"]
    assert enum == ["discover", "view_parameters", "invoke"]


@pytest.mark.asyncio
async def test_empty_call_returns_usage(client, override_dispatch):
    override_dispatch(SpaceToolDispatch(Settings()))
    async with client:
        response = await client.post("/api/v1/tools/dynamic_space")
    body = response.json()
    assert response.status_code == 200
    assert body["isError"] is False
    assert body["content"][0]["type"] == "text"
    assert body["result"]["kind"] == "summary"
    assert body["result"]["totalResults"] == 1


@pytest.mark.asyncio
async def test_tool_error_is_reported_in_body(client, override_dispatch):
    override_dispatch(SpaceToolDispatch(Settings()))
    async with client:
        response = await client.post(
            "/api/v1/tools/dynamic_space", json={"operation": "explode"},
        )
    body = response.json()
    assert response.status_code == 200
    assert body["isError"] is True
    assert 'Unknown operation: "explode"' in body["content"][0]["text"]


@pytest.mark.asyncio
async def test_call_forwards_request(client, override_dispatch):
    dispatch = AsyncMock()
    dispatch.execute = AsyncMock(return_value=ToolResult.ok("found", 2, 1))
    override_dispatch(dispatch)
    async with client:
        response = await client.post(
            "/api/v1/tools/dynamic_space",
            json={"operation": "find", "search_query": "ocr", "limit": 1},
        )
    assert dispatch.execute.await_args.args[0] == {
        "operation": "find", "search_query": "ocr", "limit": 1,
    }
    assert response.json()["result"]["resultsShared"] == 1


@pytest.mark.asyncio
async def test_bearer_token_reaches_dispatcher(client, monkeypatch):
    seen = {}

    async def fake_search(query, limit, token, *, settings=None, hub=None):
        seen["token"] = token
        return ToolResult.ok("ok", 0)

    monkeypatch.setattr("dynamic_space.services.handle_operations.search_spaces", fake_search)
    async with client:
        await client.post(
            "/api/v1/tools/dynamic_space",
            json={"operation": "find"},
            headers={"Authorization": "Bearer hf_caller"},
        )
    assert seen["token"] == "hf_caller"


@pytest.mark.asyncio
async def test_malformed_field_without_operation_returns_usage(client, override_dispatch):
    override_dispatch(SpaceToolDispatch(Settings()))
    async with client:
        response = await client.post(
            "/api/v1/tools/dynamic_space", json={"limit": "many"},
        )
    body = response.json()
    assert response.status_code == 200
    assert body["isError"] is False
    assert body["result"]["totalResults"] == 1


@pytest.mark.asyncio
async def test_malformed_field_is_reported_in_body(client, override_dispatch):
    override_dispatch(SpaceToolDispatch(Settings()))
    async with client:
        response = await client.post(
            "/api/v1/tools/dynamic_space", json={"operation": "find", "limit": "many"},
        )
    body = response.json()
    assert response.status_code == 200
    assert body["isError"] is True
    assert body["content"][0]["text"].startswith("Invalid request:")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", ["{not json", "[1, 2]"])
async def test_non_object_body_is_rejected(client, payload):
    async with client:
        response = await client.post(
            "/api/v1/tools/dynamic_space",
            content=payload, headers={"Content-Type": "application/json"},
        )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_health_and_readiness(client):
    async with client:
        health = await client.get("/api/v1/health/")
        ready = await client.get("/api/v1/health/ready")
    assert health.json()["status"] == "healthy"
    assert ready.json()["mode"] == "standard"
    assert ready.json()["checks"]["hf_token"] == "absent"
