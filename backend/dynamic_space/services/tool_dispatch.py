"""Tool Dispatch — the dynamic_space operation router.

Invariants:
    - execute() never raises (except asyncio cancellation); every outcome is a
      ToolResult or an InvokeResult
    - Mode is resolved once per dispatcher from settings and never mutated
    - No operation -> usage instructions for the active mode (1/1, not an error),
      even when other fields of the request are malformed
    - Operation names are matched case-insensitively; error text quotes the
      name exactly as the caller sent it
    - A mode redirect (find in discover mode) is reported before the generic
      unknown-operation check, with its own message
    - Any exception from a handler or collaborator becomes an error ToolResult
      naming the attempted operation
    - Every call logged with operation, mode, outcome and duration, including
      usage calls and unparseable requests

Design Decisions:
    - Explicit dict over getattr: every operation->handler mapping visible in one place
    - No timeout or retry here: transports own their timeouts, and a failure
      surfaces as an error result on the first attempt
"""

import logging
import time
from typing import Any

from pydantic import ValidationError

from dynamic_space.config import Settings, get_dynamic_space_data_url, get_settings
from dynamic_space.core.domain_types import Mode, Operation
from dynamic_space.core.errors import DynamicSpaceError
from dynamic_space.core.format_messages import (
    format_execution_error,
    format_invalid_request,
    format_mode_mismatch,
    format_unknown_operation,
)
from dynamic_space.core.operation_mode import (
    get_mode_profile,
    is_allowed_operation,
    mode_alternative,
    normalize_operation,
    resolve_mode,
)
from dynamic_space.core.tool_result import InvokeResult, ToolResult
from dynamic_space.schemas.space_tool import OperationRequest
from dynamic_space.services.handle_operations import SpaceOperationHandlers
from dynamic_space.services.space_invocation import InvokeContext

logger = logging.getLogger(__name__)


def _error_message(error: Exception) -> str:
    if isinstance(error, DynamicSpaceError):
        return error.message
    return str(error) or type(error).__name__


def _validation_detail(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc']) or 'request'}: {e['msg']}"
        for e in error.errors()
    )


class SpaceToolDispatch:
    """Routes a dynamic_space request to exactly one operation handler."""

    def __init__(
        self,
        settings: Settings | None = None,
        token: str | None = None,
        mode: Mode | None = None,
    ):
        self._settings = settings or get_settings()
        self._mode = mode or resolve_mode(get_dynamic_space_data_url(self._settings))
        self._profile = get_mode_profile(self._mode)
        handlers = SpaceOperationHandlers(
            self._settings, token or self._settings.hf_token,
        )

        self._handlers = {
            Operation.FIND: handlers.find,
            Operation.DISCOVER: handlers.discover,
            Operation.VIEW_PARAMETERS: handlers.view_parameters,
            Operation.INVOKE: handlers.invoke,
        }

    @property
    def mode(self) -> Mode:
        return self._mode

    async def execute(
        self,
        request: OperationRequest | dict[str, Any] | None,
        context: InvokeContext | None = None,
    ) -> ToolResult | InvokeResult:
        """Validate, route and run one request. Returns a result for every input."""
        started = time.monotonic()
        parsed, invalid = self._parse_request(request)
        if invalid:
            self._log_outcome(None, invalid, started)
            return invalid

        requested = parsed.operation
        if not requested:
            usage = ToolResult.ok(self._profile.usage_instructions, 1)
            self._log_outcome(None, usage, started)
            return usage

        operation, rejected = self._resolve_operation(requested)
        if rejected:
            self._log_outcome(requested, rejected, started)
            return rejected

        try:
            result = await self._handlers[operation](parsed, context)
        except Exception as e:
            logger.warning(
                f"Operation '{requested}' failed: {e}",
                exc_info=not isinstance(e, DynamicSpaceError),
                extra={
                    "operation": operation.value,
                    "mode": self._mode.value,
                    "space_name": parsed.space_name,
                    "error_code": getattr(e, "code", type(e).__name__),
                },
            )
            result = ToolResult.error(format_execution_error(requested, _error_message(e)))

        self._log_outcome(requested, result, started)
        return result

    def _parse_request(
        self, request: OperationRequest | dict[str, Any] | None,
    ) -> tuple[OperationRequest | None, ToolResult | None]:
        """Coerce raw arguments into an OperationRequest or an error result."""
        if isinstance(request, OperationRequest):
            return request, None
        try:
            return OperationRequest.model_validate(request or {}), None
        except ValidationError as e:
            # a request without an operation is the usage call, whatever else it carries
            if isinstance(request, dict) and not request.get("operation"):
                return OperationRequest(), None
            return None, ToolResult.error(format_invalid_request(_validation_detail(e)))

    def _resolve_operation(
        self, requested: str,
    ) -> tuple[Operation | None, ToolResult | None]:
        """(Operation, None) when legal in this mode, else (None, error result)."""
        suggested = mode_alternative(self._mode, requested)
        if suggested is not None:
            return None, ToolResult.error(format_mode_mismatch(
                Operation(normalize_operation(requested)), suggested,
            ))
        if not is_allowed_operation(self._mode, requested):
            return None, ToolResult.error(format_unknown_operation(
                requested, self._profile.operation_names,
            ))
        return Operation(normalize_operation(requested)), None

    def _log_outcome(
        self, requested: str | None, result: ToolResult | InvokeResult, started: float,
    ) -> None:
        """`requested` is None for usage calls and unparseable requests."""
        logger.info(
            f"dynamic_space {requested or '-'} -> {'error' if result.is_error else 'ok'}",
            extra={
                "operation": requested,
                "mode": self._mode.value,
                "duration_ms": round((time.monotonic() - started) * 1000, 1),
            },
        )
