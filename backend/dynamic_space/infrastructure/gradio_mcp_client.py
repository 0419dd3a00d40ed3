"""Gradio MCP Client — calls a Space's MCP tool over Streamable HTTP.

Invariants:
    - One MCP session per invocation: initialize -> call_tool -> close
    - The read timeout bounds the whole tool call; connect timeout is the
      regular HTTP timeout
    - Transport failures -> SpaceInvocationError / UpstreamTimeoutError;
      a tool-level error comes back as CallToolResult(isError=True), not an exception
    - asyncio cancellation propagates (session and HTTP client are closed by
      their context managers)

Design Decisions:
    - mcp SDK ClientSession over hand-rolled JSON-RPC: protocol negotiation,
      progress notifications and content typing come for free
    - Shared httpx.AsyncClient carries the bearer token for private Spaces
"""

import logging
from datetime import timedelta
from typing import Any

import httpx
from mcp import types
from mcp.client.session import ClientSession
from mcp.client.streamable_http import streamable_http_client
from mcp.shared.exceptions import McpError
from mcp.shared.session import ProgressFnT

from dynamic_space.core.errors import (
    ErrorContext,
    SpaceInvocationError,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)


def _root_cause(error: BaseException) -> BaseException:
    """First leaf of an exception group (anyio task groups wrap transport errors)."""
    while isinstance(error, BaseExceptionGroup) and error.exceptions:
        error = error.exceptions[0]
    return error


class GradioMCPClient:
    """Invokes tools on one Space's `/gradio_api/mcp/` endpoint."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout_seconds: float = 300.0,
        connect_timeout_seconds: float = 30.0,
    ):
        self.endpoint = f"{base_url.rstrip('/')}/gradio_api/mcp/"
        self.token = token
        self.timeout_seconds = timeout_seconds
        self.connect_timeout_seconds = connect_timeout_seconds

    def _http_client(self) -> httpx.AsyncClient:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        return httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(self.connect_timeout_seconds, read=self.timeout_seconds),
            follow_redirects=True,
        )

    async def call_tool(
        self,
        space_name: str,
        tool_name: str,
        arguments: dict[str, Any],
        progress_callback: ProgressFnT | None = None,
    ) -> types.CallToolResult:
        context = ErrorContext(operation="invoke", space_name=space_name, url=self.endpoint)
        try:
            async with self._http_client() as http_client:
                async with streamable_http_client(
                    self.endpoint, http_client=http_client,
                ) as (read, write, _):
                    async with ClientSession(read, write) as session:
                        await session.initialize()
                        return await session.call_tool(
                            tool_name,
                            arguments,
                            read_timeout_seconds=timedelta(seconds=self.timeout_seconds),
                            progress_callback=progress_callback,
                        )
        except Exception as e:
            cause = _root_cause(e)
            if isinstance(cause, httpx.TimeoutException):
                raise UpstreamTimeoutError(space_name, self.timeout_seconds, context=context)
            if isinstance(cause, McpError):
                raise SpaceInvocationError(space_name, cause.error.message, context=context)
            logger.warning(
                f"MCP call to {space_name} failed: {cause!r}",
                extra={"space_name": space_name, "url": self.endpoint},
            )
            raise SpaceInvocationError(
                space_name, str(cause) or type(cause).__name__, context=context,
            )
