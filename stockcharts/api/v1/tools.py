"""Tool catalogue and execution endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from stockcharts.core.deps import get_tool_service
from stockcharts.core.exceptions import InvalidParameterError
from stockcharts.schemas.tools import ToolListResponse, ToolResult
from stockcharts.services.tool_service import ToolService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/tools",
    response_model=ToolListResponse,
    summary="List Tools",
    description="List every analysis tool with its description and JSON input schema.",
    operation_id="list_tools",
)
async def list_tools(
    tool_service: ToolService = Depends(get_tool_service),
) -> ToolListResponse:
    """List available tools.

    Returns:
        ToolListResponse: Tool catalogue
    """
    return ToolListResponse(tools=tool_service.list_tools())


@router.post(
    "/tools/{tool_name}",
    response_model=ToolResult,
    summary="Execute Tool",
    description="Run a named tool with a JSON argument object. The result is a "
    "plain-text table with a header row, a separator row and one row per sample.",
    operation_id="execute_tool",
    responses={
        400: {"description": "Unknown tool or invalid arguments"},
        502: {"description": "Market data unavailable"},
        500: {"description": "Internal Server Error"},
    },
)
async def execute_tool(
    tool_name: str,
    arguments: dict[str, Any] = Body(..., description="Tool arguments"),
    tool_service: ToolService = Depends(get_tool_service),
) -> ToolResult:
    """Execute a tool.

    Args:
        tool_name: Name of the tool, e.g. calculate_technical_indicator
        arguments: JSON argument object
        tool_service: Tool service dependency

    Returns:
        ToolResult: Text table

    Raises:
        HTTPException: 400 if the tool is unknown or its arguments are invalid
    """
    try:
        return await tool_service.execute_tool(tool_name, arguments)
    except InvalidParameterError as e:
        logger.info(f"Rejected {tool_name} call: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
