"""Space Search — the `find` collaborator (Hub semantic search over MCP Spaces).

Invariants:
    - limit defaults to settings.search_default_limit and is clamped to [1, 50]
    - Blank/absent query lists trending MCP Spaces instead of searching
    - total_results = matches reported by the Hub; results_shared = rows rendered
    - Zero matches is a normal (non-error) result
    - Hub failures propagate as DynamicSpaceError (the router reports them)
"""

import logging

from dynamic_space.config import Settings, get_settings
from dynamic_space.core.markdown import code_span, escape_markdown, markdown_table
from dynamic_space.core.tool_result import ToolResult
from dynamic_space.infrastructure.hub_client import HubClient

logger = logging.getLogger(__name__)

MAX_LIMIT = 50
SPACE_URL_BASE = "https://hf.co/spaces"

_FOOTER = (
    'Use `"operation": "view_parameters"` with a Space ID to inspect its '
    "parameters before invoking."
)


def clamp_limit(limit: float | None, default: int) -> int:
    """Whole number of rows to show; fractional limits are truncated."""
    if limit is None:
        limit = default
    return max(1, min(int(limit), MAX_LIMIT))


def _description(space: dict) -> str:
    card = space.get("cardData") or {}
    return (
        space.get("ai_short_description")
        or space.get("shortDescription")
        or card.get("short_description")
        or "No description"
    )


def format_search_results(query: str | None, spaces: list[dict], total: int) -> str:
    title = f'# MCP Space Search Results for "{query}"' if query else "# Trending MCP Spaces"
    rows = []
    for space in spaces:
        space_id = space.get("id") or ""
        name = space.get("title") or space_id.split("/")[-1]
        rows.append([
            f"[{escape_markdown(name)}]({SPACE_URL_BASE}/{space_id})",
            escape_markdown(_description(space)),
            escape_markdown(space.get("author") or space_id.split("/")[0]),
            str(space.get("likes", 0)),
            code_span(space_id),
        ])
    table = markdown_table(["Space", "Description", "Author", "Likes", "Space ID"], rows)
    return (
        f"{title}\n\nShowing {len(spaces)} of {total} spaces.\n\n"
        f"{table}\n{_FOOTER}\n"
    )


async def search_spaces(
    query: str | None,
    limit: float | None,
    token: str | None,
    *,
    settings: Settings | None = None,
    hub: HubClient | None = None,
) -> ToolResult:
    """Find MCP-enabled Spaces matching a task-focused or semantic query."""
    settings = settings or get_settings()
    hub = hub or HubClient.from_settings(settings, token)
    count = clamp_limit(limit, settings.search_default_limit)
    query = query.strip() if query else None

    if query:
        matches = await hub.search_spaces(query)
    else:
        matches = await hub.list_mcp_spaces(count)

    if not matches:
        target = f'"{query}"' if query else "the trending list"
        return ToolResult.ok(
            f"No matching MCP Spaces found for {target}. "
            "Try a broader, task-focused query (e.g. \"image generation\").",
            0,
        )

    shown = matches[:count]
    logger.info(
        f"Space search returned {len(matches)} matches",
        extra={"operation": "find"},
    )
    return ToolResult.ok(
        format_search_results(query, shown, len(matches)),
        total_results=len(matches),
        results_shared=len(shown),
    )
