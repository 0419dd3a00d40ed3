"""MCP stdio server — exposes the dynamic_space tool to MCP clients.

Invariants:
    - list_tools returns exactly one tool: the definition for the process's mode
    - call_tool never raises for dynamic_space: the router's result is framed
      as a CallToolResult (isError carried through)
    - Input validation against the tool schema is disabled: the router owns
      validation (case-insensitive operation names, self-teaching errors)
    - Progress notifications from a space are relayed when the caller sent a
      progress token
"""

import asyncio
import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from dynamic_space.config import get_settings
from dynamic_space.core.operation_mode import resolve_mode
from dynamic_space.infrastructure.observability import setup_logging
from dynamic_space.services.define_space_tool import TOOL_NAME, get_space_tool_definition
from dynamic_space.services.space_invocation import InvokeContext
from dynamic_space.services.tool_dispatch import SpaceToolDispatch

logger = logging.getLogger(__name__)

server = Server("dynamic-space")


@server.list_tools()
async def list_tools() -> list[types.Tool]:
    mode = resolve_mode(get_settings().dynamic_space_data)
    return [types.Tool.model_validate(get_space_tool_definition(mode))]


def _invoke_context() -> InvokeContext:
    """Build progress relaying from the current MCP request, when possible."""
    ctx = server.request_context
    token = ctx.meta.progressToken if ctx.meta else None
    if token is None:
        return InvokeContext(request_id=str(ctx.request_id))

    async def relay(progress: float, total: float | None, message: str | None) -> None:
        await ctx.session.send_progress_notification(
            token, progress, total=total, message=message,
        )

    return InvokeContext(progress_callback=relay, request_id=str(ctx.request_id))


@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
    if name != TOOL_NAME:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=f"Unknown tool: {name}")],
            isError=True,
        )
    result = await SpaceToolDispatch().execute(arguments or {}, _invoke_context())
    return types.CallToolResult.model_validate(result.to_call_tool_result())


async def serve() -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        "dynamic_space MCP server starting",
        extra={"mode": resolve_mode(settings.dynamic_space_data).value},
    )
    asyncio.run(serve())


if __name__ == "__main__":
    main()
