"""Tool Results — the two result shapes the dispatcher can return.

Invariants:
    - ToolResult (summary): formatted text + counts, results_shared <= total_results
    - ToolResult.is_error=True means `formatted` is a diagnostic, never a payload
    - Error summaries always carry total_results = results_shared = 0
    - InvokeResult (pass-through): remote MCP content items forwarded verbatim
    - Only the invoke operation may produce an InvokeResult

Design Decisions:
    - Explicit `kind` discriminator: transports match on it instead of probing
      for totalResults/content keys
    - camelCase aliases keep the wire names (totalResults, resultsShared, isError)
      while Python code uses snake_case
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ToolResult(BaseModel):
    """Summary result: human/markdown text plus result counts."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["summary"] = "summary"
    formatted: str
    total_results: int = Field(alias="totalResults", ge=0)
    results_shared: int = Field(alias="resultsShared", ge=0)
    is_error: bool = Field(False, alias="isError")

    @model_validator(mode="after")
    def check_shared_within_total(self) -> "ToolResult":
        if self.results_shared > self.total_results:
            raise ValueError(
                f"results_shared ({self.results_shared}) cannot exceed "
                f"total_results ({self.total_results})"
            )
        return self

    @classmethod
    def ok(cls, formatted: str, total_results: int, results_shared: int | None = None) -> "ToolResult":
        shared = total_results if results_shared is None else results_shared
        return cls(formatted=formatted, total_results=total_results, results_shared=shared)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(formatted=message, total_results=0, results_shared=0, is_error=True)

    def to_call_tool_result(self) -> dict[str, Any]:
        """MCP CallToolResult framing: one text item holding `formatted`."""
        return {
            "content": [{"type": "text", "text": self.formatted}],
            "isError": self.is_error,
        }


class InvokeResult(BaseModel):
    """Pass-through result: raw content returned by a space's MCP tool."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["pass_through"] = "pass_through"
    space_name: str
    content: list[dict[str, Any]]
    is_error: bool = Field(False, alias="isError")
    warnings: list[str] = Field(default_factory=list)

    def to_call_tool_result(self) -> dict[str, Any]:
        """Forward content unchanged; parameter warnings go first as text."""
        items: list[dict[str, Any]] = []
        if self.warnings:
            lines = "\n".join(f"- {w}" for w in self.warnings)
            items.append({"type": "text", "text": f"Warnings:\n{lines}"})
        items.extend(self.content)
        return {"content": items, "isError": self.is_error}


SpaceToolResult = Annotated[
    Union[ToolResult, InvokeResult], Field(discriminator="kind"),
]
