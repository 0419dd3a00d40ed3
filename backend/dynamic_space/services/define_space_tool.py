"""Define Space Tool — MCP tool schemas for the dynamic_space tool, one per mode.

Invariants:
    - Both definitions are named "dynamic_space"
    - No input field is required (no operation -> usage instructions)
    - The `operation` enum lists the mode's legal operations; standard mode
      carries search_query/limit, discover mode does not
    - `parameters` is declared as a string (JSON-encoded object)

Design Decisions:
    - Tool schemas in a dedicated file: explicit, no auto-discovery
    - Descriptions come from the mode profile so help text and schema agree
"""

from typing import Any

from dynamic_space.core.domain_types import Mode
from dynamic_space.core.operation_mode import get_mode_profile

TOOL_NAME = "dynamic_space"

_ANNOTATIONS = {
    "title": "Dynamically use Gradio Applications",
    "readOnlyHint": False,
    "openWorldHint": True,
}

_SPACE_NAME_PROPERTY = {
    "type": "string",
    "description": 'Space ID in "author/space-name" form (view_parameters, invoke)',
}

_PARAMETERS_PROPERTY = {
    "type": "string",
    "description": (
        "JSON-encoded object of space parameters (invoke). "
        'Example: "{\\"prompt\\": \\"a cute cat\\"}"'
    ),
}


def _operation_property(mode: Mode) -> dict[str, Any]:
    profile = get_mode_profile(mode)
    return {
        "type": "string",
        "enum": profile.operation_names,
        "description": "Operation to execute. Omit for usage instructions.",
    }


def _input_schema(mode: Mode) -> dict[str, Any]:
    properties: dict[str, Any] = {"operation": _operation_property(mode)}
    if mode == Mode.STANDARD:
        properties["search_query"] = {
            "type": "string",
            "description": "Task-focused or semantic search query (find)",
        }
        properties["limit"] = {
            "type": "number",
            "description": "Maximum number of results to return (find)",
        }
    properties["space_name"] = dict(_SPACE_NAME_PROPERTY)
    properties["parameters"] = dict(_PARAMETERS_PROPERTY)
    return {"type": "object", "properties": properties, "required": []}


def _tool_definition(mode: Mode) -> dict[str, Any]:
    return {
        "name": TOOL_NAME,
        "description": get_mode_profile(mode).tool_description,
        "inputSchema": _input_schema(mode),
        "annotations": dict(_ANNOTATIONS),
    }


STANDARD_TOOL_DEFINITION = _tool_definition(Mode.STANDARD)
DISCOVER_TOOL_DEFINITION = _tool_definition(Mode.DISCOVER)


def get_space_tool_definition(mode: Mode) -> dict[str, Any]:
    if mode == Mode.DISCOVER:
        return DISCOVER_TOOL_DEFINITION
    return STANDARD_TOOL_DEFINITION
