"""Space Search — tests for the find collaborator against a mocked Hub.

Tests cover:
    - Query -> semantic search endpoint with the MCP filter
    - No query -> trending list with the clamped limit
    - total = matches, shared = rows rendered
    - Zero matches is not an error
    - Hub failures propagate as DynamicSpaceError
"""

import httpx
import pytest

from dynamic_space.core.errors import HubAPIError, UpstreamTimeoutError
from dynamic_space.infrastructure.hub_client import HubClient
from dynamic_space.services.space_search import clamp_limit, search_spaces

SPACES = [
    {"id": f"acme/space-{i}", "title": f"Space {i}", "likes": i,
     "ai_short_description": f"Does thing {i}"}
    for i in range(12)
]


def _hub(handler) -> HubClient:
    return HubClient(transport=httpx.MockTransport(handler), token="hf_test")


def test_clamp_limit():
    assert clamp_limit(None, 10) == 10
    assert clamp_limit(0, 10) == 1
    assert clamp_limit(500, 10) == 50
    assert clamp_limit(2.5, 10) == 2
    assert clamp_limit(0.5, 10) == 1


@pytest.mark.asyncio
async def test_query_uses_semantic_search(standard_settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=SPACES)

    result = await search_spaces(
        "image generation", 5, "hf_test", settings=standard_settings, hub=_hub(handler),
    )
    assert seen["path"] == "/api/spaces/semantic-search"
    assert seen["params"] == {"q": "image generation", "filter": "mcp-server"}
    assert seen["auth"] == "Bearer hf_test"
    assert (result.total_results, result.results_shared) == (12, 5)
    assert not result.is_error
    assert '"image generation"' in result.formatted
    assert "Showing 5 of 12 spaces." in result.formatted
    assert "`acme/space-4`" in result.formatted
    assert "acme/space-5" not in result.formatted


@pytest.mark.asyncio
async def test_default_limit_from_settings(standard_settings):
    result = await search_spaces(
        "tts", None, None, settings=standard_settings,
        hub=_hub(lambda r: httpx.Response(200, json=SPACES)),
    )
    assert result.results_shared == standard_settings.search_default_limit


@pytest.mark.asyncio
@pytest.mark.parametrize("query", [None, "", "   "])
async def test_blank_query_lists_trending(standard_settings, query):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=SPACES[:3])

    result = await search_spaces(query, 3, None, settings=standard_settings, hub=_hub(handler))
    assert seen["path"] == "/api/spaces"
    assert seen["params"]["sort"] == "trendingScore"
    assert seen["params"]["limit"] == "3"
    assert result.formatted.startswith("# Trending MCP Spaces")
    assert (result.total_results, result.results_shared) == (3, 3)


@pytest.mark.asyncio
async def test_no_matches_is_not_an_error(standard_settings):
    result = await search_spaces(
        "nothing", None, None, settings=standard_settings,
        hub=_hub(lambda r: httpx.Response(200, json=[])),
    )
    assert not result.is_error
    assert result.total_results == 0
    assert '"nothing"' in result.formatted


@pytest.mark.asyncio
async def test_hub_error_propagates(standard_settings):
    with pytest.raises(HubAPIError) as exc_info:
        await search_spaces(
            "x", None, None, settings=standard_settings,
            hub=_hub(lambda r: httpx.Response(500)),
        )
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_timeout_is_mapped(standard_settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(UpstreamTimeoutError):
        await search_spaces("x", None, None, settings=standard_settings, hub=_hub(handler))


@pytest.mark.asyncio
async def test_fractional_limit_is_truncated(standard_settings):
    result = await search_spaces(
        "tts", 2.5, None, settings=standard_settings,
        hub=_hub(lambda r: httpx.Response(200, json=SPACES)),
    )
    assert (result.total_results, result.results_shared) == (12, 2)


@pytest.mark.asyncio
async def test_space_without_id_still_renders(standard_settings):
    spaces = [{"id": None, "title": "Nameless"}, {"id": "acme/ok"}]
    result = await search_spaces(
        "x", None, None, settings=standard_settings,
        hub=_hub(lambda r: httpx.Response(200, json=spaces)),
    )
    assert not result.is_error
    assert result.total_results == 2
    assert "Nameless" in result.formatted
    assert "`acme/ok`" in result.formatted
