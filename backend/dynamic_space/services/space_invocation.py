"""Space Invocation — the `invoke` collaborator.

Invariants:
    - `parameters` must decode to a JSON object; otherwise an error ToolResult
      is returned and no network call is made
    - Arguments are coerced against the space's own declared schema
      (core/parameter_schema.py) before the call; missing required
      parameters stop the call with an error ToolResult
    - A completed MCP call always yields an InvokeResult whose content is the
      remote content forwarded verbatim (minus images when no_image_content)
    - Transport failures propagate as DynamicSpaceError (the router reports them)
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from mcp.shared.session import ProgressFnT

from dynamic_space.config import Settings, get_settings
from dynamic_space.core.format_messages import (
    format_invalid_parameters,
    format_missing_required,
)
from dynamic_space.core.parameter_schema import coerce_arguments
from dynamic_space.core.tool_result import InvokeResult, ToolResult
from dynamic_space.infrastructure.gradio_mcp_client import GradioMCPClient
from dynamic_space.infrastructure.hub_client import HubClient
from dynamic_space.services.space_parameters import fetch_space_schema

logger = logging.getLogger(__name__)


@dataclass
class InvokeContext:
    """Per-call context forwarded from the transport (progress reporting)."""
    progress_callback: ProgressFnT | None = None
    request_id: str | None = None


MCPClientFactory = Callable[[str, str | None, Settings], GradioMCPClient]


def _default_client_factory(base_url: str, token: str | None, settings: Settings) -> GradioMCPClient:
    return GradioMCPClient(
        base_url,
        token=token,
        timeout_seconds=settings.invoke_timeout_seconds,
        connect_timeout_seconds=settings.http_timeout_seconds,
    )


def decode_parameters(parameters_json: str) -> dict[str, Any]:
    """Decode the JSON-encoded parameter object. Raises ValueError."""
    try:
        decoded = json.loads(parameters_json)
    except json.JSONDecodeError as e:
        raise ValueError(f"not valid JSON ({e.msg} at position {e.pos})")
    if not isinstance(decoded, dict):
        raise ValueError(f"expected a JSON object, got {type(decoded).__name__}")
    return decoded


def strip_image_content(content: list[dict[str, Any]]) -> list[dict[str, Any]]:
    kept = [item for item in content if item.get("type") != "image"]
    dropped = len(content) - len(kept)
    if dropped:
        kept.append({"type": "text", "text": f"[{dropped} image(s) omitted]"})
    return kept


async def invoke_space(
    space_name: str,
    parameters_json: str,
    token: str | None,
    context: InvokeContext | None = None,
    *,
    settings: Settings | None = None,
    hub: HubClient | None = None,
    client_factory: MCPClientFactory | None = None,
) -> InvokeResult | ToolResult:
    """Decode, coerce and execute a call to a space's first MCP tool."""
    settings = settings or get_settings()
    try:
        supplied = decode_parameters(parameters_json)
    except ValueError as e:
        return ToolResult.error(format_invalid_parameters(space_name, str(e)))

    hub = hub or HubClient.from_settings(settings, token)
    resolved = await fetch_space_schema(space_name, hub)
    outcome = coerce_arguments(resolved.schema, supplied)
    if outcome.missing_required:
        return ToolResult.error(format_missing_required(
            space_name, resolved.schema.tool_name, outcome.missing_required,
        ))

    factory = client_factory or _default_client_factory
    client = factory(resolved.base_url, token, settings)
    logger.info(
        f"Invoking {space_name} tool {resolved.schema.tool_name}",
        extra={"operation": "invoke", "space_name": space_name},
    )
    result = await client.call_tool(
        space_name,
        resolved.schema.tool_name,
        outcome.arguments,
        progress_callback=context.progress_callback if context else None,
    )

    content = [
        item.model_dump(mode="json", by_alias=True, exclude_none=True)
        for item in result.content
    ]
    if settings.no_image_content:
        content = strip_image_content(content)
    return InvokeResult(
        space_name=space_name,
        content=content,
        is_error=bool(result.isError),
        warnings=outcome.warnings,
    )
