"""Space Discovery — the `discover` collaborator (curated CSV list).

Invariants:
    - Never raises: fetch and transport failures become error ToolResults
      naming the data URL
    - An empty list (no non-blank lines, or no rows with a space id) is a
      normal "no data" result, not an error
    - total_results = results_shared = rendered rows
"""

import logging

from dynamic_space.config import Settings, get_settings
from dynamic_space.core.discover_csv import (
    NO_DATA,
    format_fetch_error,
    parse_discovery_csv,
    render_discovery_table,
)
from dynamic_space.core.errors import HubAPIError
from dynamic_space.core.tool_result import ToolResult
from dynamic_space.infrastructure.hub_client import HubClient

logger = logging.getLogger(__name__)


async def discover_spaces(
    data_url: str,
    *,
    settings: Settings | None = None,
    hub: HubClient | None = None,
) -> ToolResult:
    """List every space in the configured discovery CSV as a markdown table."""
    hub = hub or HubClient.from_settings(settings or get_settings())
    try:
        text = await hub.fetch_text(data_url)
    except HubAPIError as e:
        detail = f"HTTP {e.status_code}" if e.status_code else e.message
        logger.warning(
            f"Discovery list fetch failed: {detail}",
            extra={"operation": "discover", "url": data_url},
        )
        return ToolResult.error(format_fetch_error(data_url, detail))
    except Exception as e:
        logger.warning(
            f"Discovery list fetch failed: {e}",
            extra={"operation": "discover", "url": data_url},
        )
        return ToolResult.error(format_fetch_error(data_url, str(e)))

    spaces = parse_discovery_csv(text)
    if not spaces:
        return ToolResult.ok(NO_DATA, 0)
    return ToolResult.ok(render_discovery_table(spaces), len(spaces))
