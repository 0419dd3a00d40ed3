"""Operation Handlers — per-operation preconditions in front of each collaborator (4 methods).

Invariants:
    - Every handler has the same signature (request, context) so the router's
      dispatch table is uniform
    - Empty strings count as absent for space_name and parameters
    - A failed precondition returns an error ToolResult with a worked example;
      it never raises
    - Collaborator results are returned unchanged; collaborator exceptions are
      left for the router to contain
    - invoke is the only handler that may return an InvokeResult

Design Decisions:
    - find does no validation of its own: an absent search_query is the
      search collaborator's concern (it lists trending spaces)
    - discover re-reads the data URL instead of trusting the mode: a mode/config
      mismatch gets its own configuration error
"""

from dynamic_space.config import Settings, get_dynamic_space_data_url
from dynamic_space.core.domain_types import Operation
from dynamic_space.core.format_messages import (
    format_missing_configuration,
    format_missing_parameters,
    format_missing_space_name,
)
from dynamic_space.core.tool_result import InvokeResult, ToolResult
from dynamic_space.schemas.space_tool import OperationRequest
from dynamic_space.services.space_discovery import discover_spaces
from dynamic_space.services.space_invocation import InvokeContext, invoke_space
from dynamic_space.services.space_parameters import view_parameters
from dynamic_space.services.space_search import search_spaces

DATA_SOURCE_SETTING = "DYNAMIC_SPACE_DATA"


class SpaceOperationHandlers:
    """find / discover / view_parameters / invoke preconditions."""

    def __init__(self, settings: Settings, token: str | None = None):
        self.settings = settings
        self.token = token

    async def find(
        self, request: OperationRequest, context: InvokeContext | None = None,
    ) -> ToolResult:
        return await search_spaces(
            request.search_query, request.limit, self.token, settings=self.settings,
        )

    async def discover(
        self, request: OperationRequest, context: InvokeContext | None = None,
    ) -> ToolResult:
        data_url = get_dynamic_space_data_url(self.settings)
        if not data_url:
            return ToolResult.error(format_missing_configuration(DATA_SOURCE_SETTING))
        return await discover_spaces(data_url, settings=self.settings)

    async def view_parameters(
        self, request: OperationRequest, context: InvokeContext | None = None,
    ) -> ToolResult:
        if not request.space_name:
            return ToolResult.error(format_missing_space_name(Operation.VIEW_PARAMETERS))
        return await view_parameters(
            request.space_name, self.token, settings=self.settings,
        )

    async def invoke(
        self, request: OperationRequest, context: InvokeContext | None = None,
    ) -> InvokeResult | ToolResult:
        if not request.space_name:
            return ToolResult.error(format_missing_space_name(Operation.INVOKE))
        if not request.parameters:
            return ToolResult.error(format_missing_parameters(request.space_name))
        return await invoke_space(
            request.space_name, request.parameters, self.token, context,
            settings=self.settings,
        )
