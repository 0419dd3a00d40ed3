"""Hub Client — async httpx access to the Hugging Face Hub and Space hosts.

Invariants:
    - One AsyncClient per call, closed on exit (including cancellation)
    - Timeouts -> UpstreamTimeoutError; 401/403/404 on a space -> SpaceNotFoundError;
      other non-2xx and connection failures -> HubAPIError (core/errors.py)
    - No retries: the first failure is reported to the caller
    - Bearer token sent only when one was supplied

Design Decisions:
    - Thin wrapper isolates error mapping from collaborators (single responsibility)
    - transport injectable: tests run against httpx.MockTransport
"""

import logging
from typing import Any

import httpx

from dynamic_space.config import Settings
from dynamic_space.core.errors import (
    ErrorContext,
    HubAPIError,
    SpaceNotFoundError,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)

_MCP_FILTER = "mcp-server"


def space_subdomain(space_name: str, info: dict | None = None) -> str:
    """Host label of a space: Hub-provided subdomain, else derived from the name."""
    if info and info.get("subdomain"):
        return info["subdomain"]
    slug = space_name.replace("/", "-").replace("_", "-").replace(".", "-")
    return slug.lower()


class HubClient:
    """Read-only Hub API + Space host access with error mapping."""

    def __init__(
        self,
        hub_url: str = "https://huggingface.co",
        space_domain: str = "hf.space",
        timeout_seconds: float = 30.0,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.hub_url = hub_url.rstrip("/")
        self.space_domain = space_domain
        self.timeout_seconds = timeout_seconds
        self.token = token
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HubClient":
        return cls(
            hub_url=settings.hub_url,
            space_domain=settings.space_domain,
            timeout_seconds=settings.http_timeout_seconds,
            token=token,
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def space_base_url(self, subdomain: str) -> str:
        return f"https://{subdomain}.{self.space_domain}"

    async def _get(
        self, url: str, *, params: dict | None = None,
        space_name: str | None = None, authenticated: bool = True,
    ) -> httpx.Response:
        """GET with error mapping. Returns only 2xx responses."""
        context = ErrorContext(space_name=space_name, url=url)
        headers = self._headers() if authenticated else {}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException:
            raise UpstreamTimeoutError(url, self.timeout_seconds, context=context)
        except httpx.HTTPError as e:
            raise HubAPIError(str(e) or type(e).__name__, context=context)

        if response.is_success:
            return response
        logger.info(
            f"Upstream returned HTTP {response.status_code}",
            extra={"url": url, "status_code": response.status_code, "space_name": space_name},
        )
        if space_name and response.status_code in (401, 403, 404):
            raise SpaceNotFoundError(space_name, context=context)
        raise HubAPIError(
            response.reason_phrase or "request failed",
            status_code=response.status_code, context=context,
        )

    async def _get_json(self, url: str, **kwargs: Any) -> Any:
        response = await self._get(url, **kwargs)
        try:
            return response.json()
        except ValueError:
            raise HubAPIError(
                f"invalid JSON from {url}",
                context=ErrorContext(space_name=kwargs.get("space_name"), url=url),
            )

    # ─── Hub API ─────────────────────────────────────────────────

    async def search_spaces(self, query: str) -> list[dict]:
        """Semantic search restricted to MCP-enabled spaces (all matches)."""
        data = await self._get_json(
            f"{self.hub_url}/api/spaces/semantic-search",
            params={"q": query, "filter": _MCP_FILTER},
        )
        return list(data) if isinstance(data, list) else []

    async def list_mcp_spaces(self, limit: int) -> list[dict]:
        """Trending MCP-enabled spaces (used when no search query is given)."""
        data = await self._get_json(
            f"{self.hub_url}/api/spaces",
            params={
                "filter": _MCP_FILTER,
                "sort": "trendingScore",
                "direction": "-1",
                "limit": str(limit),
            },
        )
        return list(data) if isinstance(data, list) else []

    async def get_space_info(self, space_name: str) -> dict:
        data = await self._get_json(
            f"{self.hub_url}/api/spaces/{space_name}", space_name=space_name,
        )
        if not isinstance(data, dict):
            raise HubAPIError(
                "unexpected space info payload",
                context=ErrorContext(space_name=space_name),
            )
        return data

    # ─── Space host ──────────────────────────────────────────────

    async def get_mcp_schema(self, space_name: str, subdomain: str) -> Any:
        return await self._get_json(
            f"{self.space_base_url(subdomain)}/gradio_api/mcp/schema",
            space_name=space_name,
        )

    # ─── Arbitrary documents ─────────────────────────────────────

    async def fetch_text(self, url: str) -> str:
        """Unauthenticated GET of a text document (the discovery list)."""
        response = await self._get(url, authenticated=False)
        return response.text
