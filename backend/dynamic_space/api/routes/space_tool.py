"""Space Tool Routes — HTTP access to the dynamic_space tool.

Invariants:
    - GET /api/v1/tools/ returns the definition for the process's mode only
    - POST /api/v1/tools/dynamic_space answers 200 with a tool result for any
      JSON object body (or no body); tool-level failures and malformed fields
      are reported in the body (isError), not via HTTP status
    - A body that is not JSON, or not a JSON object, is rejected with 400
      before dispatch
    - The credential is taken from `Authorization: Bearer`, else settings.hf_token

Design Decisions:
    - One dispatcher per request: it carries the caller's credential; the mode
      still comes from the cached process settings
    - The body is taken as raw tool arguments: the dispatcher owns request
      validation, so HTTP and stdio callers get the same usage and error texts
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Header

from dynamic_space.config import get_settings
from dynamic_space.core.operation_mode import resolve_mode
from dynamic_space.schemas.space_tool import ToolCallResponse
from dynamic_space.services.define_space_tool import TOOL_NAME, get_space_tool_definition
from dynamic_space.services.tool_dispatch import SpaceToolDispatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


def bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization[:7].lower() == "bearer ":
        return authorization[7:].strip() or None
    return None


def get_space_tool_dispatch(
    authorization: str | None = Header(None),
) -> SpaceToolDispatch:
    return SpaceToolDispatch(get_settings(), token=bearer_token(authorization))


@router.get("/")
async def list_tools():
    mode = resolve_mode(get_settings().dynamic_space_data)
    return {"tools": [get_space_tool_definition(mode)]}


@router.post(f"/{TOOL_NAME}", response_model=ToolCallResponse)
async def call_space_tool(
    arguments: dict[str, Any] | None = Body(None),
    dispatch: SpaceToolDispatch = Depends(get_space_tool_dispatch),
):
    result = await dispatch.execute(arguments or {})
    framed = result.to_call_tool_result()
    return ToolCallResponse(
        content=framed["content"], is_error=framed["isError"], result=result,
    )
