"""
MCP stdio transport: wires the catalog and dispatcher into the official MCP server.

Handshake, framing and stdin/stdout plumbing are handled by the SDK; this module
only registers the list-tools and call-tool handlers.
"""

import logging

import mcp.types as types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

from rag_mcp.core.config import SERVER_NAME, SERVER_VERSION
from rag_mcp.tools.catalog import list_tools
from rag_mcp.tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)


def to_mcp_tools() -> list[types.Tool]:
    return [
        types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
        for tool in list_tools()
    ]


def build_server(dispatcher: ToolDispatcher) -> Server:
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        logger.info("[stdio] listing available tools")
        return to_mcp_tools()

    # Registered directly rather than through @server.call_tool(): the decorator
    # replaces absent arguments with {} and enforces schema bounds.
    async def _call_tool(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        try:
            result = await dispatcher.dispatch(name, req.params.arguments)
        except Exception as e:
            return types.ServerResult(
                types.CallToolResult(content=[types.TextContent(type="text", text=str(e))], isError=True)
            )
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=item.text) for item in result.content],
                isError=False,
            )
        )

    server.request_handlers[types.CallToolRequest] = _call_tool

    return server


def initialization_options(server: Server) -> InitializationOptions:
    return InitializationOptions(
        server_name=SERVER_NAME,
        server_version=SERVER_VERSION,
        capabilities=server.get_capabilities(
            notification_options=NotificationOptions(tools_changed=True),
            experimental_capabilities={},
        ),
    )


async def serve_stdio(dispatcher: ToolDispatcher) -> None:
    server = build_server(dispatcher)
    logger.info("[stdio] server ready and listening for requests")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, initialization_options(server))
