"""Space Tool Schemas — Pydantic models for the dynamic_space request/response boundary.

Invariants:
    - No field of OperationRequest is structurally required; an empty request
      is the "describe yourself" call
    - `parameters` is a JSON-encoded object STRING, decoded later by the
      invocation collaborator, never by this model
    - Unknown request keys are ignored (clients send tool-call envelopes with extras)

Design Decisions:
    - Separate from core/tool_result.py: these are transport shapes, the result
      models are domain shapes
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dynamic_space.core.tool_result import SpaceToolResult


class OperationRequest(BaseModel):
    """Arguments of one dynamic_space tool call."""

    model_config = ConfigDict(extra="ignore")

    operation: str | None = None
    search_query: str | None = None
    limit: float | None = Field(None, allow_inf_nan=False)
    space_name: str | None = None
    parameters: str | None = None


class ToolCallResponse(BaseModel):
    """HTTP response: MCP CallToolResult framing plus the typed result."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[dict[str, Any]]
    is_error: bool = Field(alias="isError")
    result: SpaceToolResult
