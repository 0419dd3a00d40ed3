"""Space Parameters — the `view_parameters` collaborator and shared schema lookup.

Invariants:
    - Schema lookup is two calls: Hub space info (-> subdomain), then the
      Space's /gradio_api/mcp/schema
    - view_parameters and invoke both use fetch_space_schema, so they always
      describe/call the same (first) tool
    - total_results = results_shared = number of declared parameters
"""

import logging
from dataclasses import dataclass

from dynamic_space.config import Settings, get_settings
from dynamic_space.core.domain_types import SpaceName
from dynamic_space.core.parameter_schema import (
    SpaceToolSchema,
    format_parameters,
    parse_tool_schema,
)
from dynamic_space.core.tool_result import ToolResult
from dynamic_space.infrastructure.hub_client import HubClient, space_subdomain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedSpace:
    """A space's first tool schema plus where to reach it."""
    space_name: SpaceName
    base_url: str
    schema: SpaceToolSchema


async def fetch_space_schema(space_name: SpaceName, hub: HubClient) -> ResolvedSpace:
    info = await hub.get_space_info(space_name)
    subdomain = space_subdomain(space_name, info)
    raw = await hub.get_mcp_schema(space_name, subdomain)
    schema = parse_tool_schema(space_name, raw)
    logger.debug(
        f"Resolved {space_name} -> {subdomain} ({len(schema.parameters)} parameters)",
        extra={"space_name": space_name},
    )
    return ResolvedSpace(space_name, hub.space_base_url(subdomain), schema)


async def view_parameters(
    space_name: str,
    token: str | None,
    *,
    settings: Settings | None = None,
    hub: HubClient | None = None,
) -> ToolResult:
    """Describe the parameters of a space's first MCP tool."""
    hub = hub or HubClient.from_settings(settings or get_settings(), token)
    resolved = await fetch_space_schema(space_name, hub)
    count = len(resolved.schema.parameters)
    return ToolResult.ok(format_parameters(space_name, resolved.schema), count)
