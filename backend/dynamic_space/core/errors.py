"""Error Hierarchy — typed exceptions raised by the dispatcher's collaborators.

Invariants:
    - Each subclass fixes its code, category, severity and HTTP status as
      class attributes; instances only add a message and an ErrorContext
    - Collaborators raise these; the operation router turns them into error
      ToolResults, so a tool caller never sees one as an exception
    - to_response() is the REST envelope for the non-tool routes

Design Decisions:
    - One base (DynamicSpaceError) so a single FastAPI handler covers all of them
    - ErrorContext is a dataclass, not logger state: it travels with the
      exception and is read by whichever layer reports it
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where an error happened: operation, space and upstream URL."""
    operation: str | None = None
    space_name: str | None = None
    url: str | None = None
    debug_info: dict[str, Any] | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class DynamicSpaceError(Exception):
    """Base exception for all dynamic_space errors."""

    code = "DYNAMIC_SPACE_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "space_name": self.context.space_name,
                },
            },
        }


# ─── Space errors (4xx) ──────────────────────────────────────────

class SpaceNotFoundError(DynamicSpaceError):
    """The Hub has no such space, or it is private to another account."""
    code = "SPACE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(self, space_name: str, context: ErrorContext | None = None):
        super().__init__(f"Space '{space_name}' not found or not accessible", context)
        self.space_name = space_name


class SpaceSchemaError(DynamicSpaceError):
    """The space exposes no usable MCP tool schema."""
    code = "SPACE_SCHEMA_ERROR"
    category = ErrorCategory.VALIDATION
    http_status = 422

    def __init__(self, space_name: str, reason: str, context: ErrorContext | None = None):
        super().__init__(f"Could not read the MCP schema of '{space_name}': {reason}", context)
        self.space_name = space_name


# ─── Upstream errors (5xx) ───────────────────────────────────────

class HubAPIError(DynamicSpaceError):
    """An HTTP call to the Hub or a space host failed."""
    code = "HUB_API_ERROR"
    category = ErrorCategory.EXTERNAL_API
    severity = ErrorSeverity.CRITICAL
    http_status = 502

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        detail = f"HTTP {status_code}: {message}" if status_code else message
        super().__init__(f"Hub API error ({detail})", context)
        self.status_code = status_code


class SpaceInvocationError(DynamicSpaceError):
    """The MCP call to a space failed before a tool result came back."""
    code = "SPACE_INVOCATION_ERROR"
    category = ErrorCategory.EXTERNAL_API
    http_status = 502

    def __init__(self, space_name: str, message: str, context: ErrorContext | None = None):
        super().__init__(f"Invocation of '{space_name}' failed: {message}", context)
        self.space_name = space_name


class UpstreamTimeoutError(DynamicSpaceError):
    code = "UPSTREAM_TIMEOUT"
    category = ErrorCategory.TIMEOUT
    http_status = 504

    def __init__(self, target: str, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(f"Request to {target} timed out after {timeout_seconds:g}s", context)
        self.timeout_seconds = timeout_seconds
