"""
HTTP tool surface: the same catalog and dispatcher exposed over FastAPI.

Responsibility: Bridge HTTP types and the dispatcher. Marshalling and
exception-to-HTTP mapping only; tool logic stays in rag_mcp.tools.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from rag_mcp.core.errors import (
    MissingArgumentsError,
    TransportError,
    UnknownToolError,
    UpstreamStatusError,
)
from rag_mcp.schemas.tools import ToolCallRequest, ToolResult
from rag_mcp.tools.catalog import initialize_result, list_tools
from rag_mcp.tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)

router = APIRouter()
mcp_router = APIRouter(tags=["mcp"])


def get_dispatcher(request: Request) -> ToolDispatcher:
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="Tool server is not initialized.")
    return dispatcher


# --- System ---

@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- MCP ---

@mcp_router.post("/initialize", summary="Static capability and version descriptor")
def mcp_initialize() -> dict[str, Any]:
    logger.info("MCP initialize")
    return initialize_result()


@mcp_router.get("/tools", summary="List available tools")
def mcp_list_tools() -> dict[str, list[dict[str, Any]]]:
    """Return the fixed tool catalog (name, description, inputSchema)."""
    logger.info("MCP listing available tools")
    return {"tools": [tool.model_dump(by_alias=True) for tool in list_tools()]}


@mcp_router.post(
    "/tools/{name}",
    summary="Call a tool",
    description="Dispatch a tool call by name. The result is one Markdown text content item.",
    response_model=ToolResult,
)
async def mcp_call_tool(
    name: str,
    body: ToolCallRequest | None = None,
    dispatcher: ToolDispatcher = Depends(get_dispatcher),
) -> ToolResult:
    arguments = body.arguments if body is not None else None
    try:
        return await dispatcher.dispatch(name, arguments)
    except UnknownToolError as e:
        raise HTTPException(status_code=404, detail=e.message) from e
    except MissingArgumentsError as e:
        raise HTTPException(status_code=422, detail=e.message) from e
    except (UpstreamStatusError, TransportError) as e:
        raise HTTPException(status_code=502, detail=e.message) from e
