"""
Tool dispatcher: route a call-tool request to exactly one handler.

Routing is an exact name lookup (no partial matching, no case folding). Per-call
failures are logged here and re-raised unchanged so the host fails that one call.
"""

import logging
from collections.abc import Mapping
from typing import Any

from rag_mcp.core.errors import MissingArgumentsError, UnknownToolError
from rag_mcp.schemas.tools import ToolResult
from rag_mcp.tools.catalog import required_fields
from rag_mcp.tools.handlers import ToolContext, ToolHandler, ToolName, build_handlers

logger = logging.getLogger(__name__)

_NAMES = {name.value: name for name in ToolName}


class ToolDispatcher:
    def __init__(self, context: ToolContext) -> None:
        self.context = context
        self._handlers: dict[ToolName, ToolHandler] = build_handlers(context)

    def resolve(self, tool_name: str) -> ToolName:
        try:
            return _NAMES[tool_name]
        except (KeyError, TypeError):
            raise UnknownToolError(tool_name) from None

    async def dispatch(self, tool_name: str, arguments: Mapping[str, Any] | None) -> ToolResult:
        logger.info("[dispatcher] calling tool: %s", tool_name)
        try:
            if arguments is None:
                raise MissingArgumentsError(tool_name)
            name = self.resolve(tool_name)
            missing = [f for f in required_fields(name.value) if arguments.get(f) is None]
            if missing:
                raise MissingArgumentsError(tool_name, missing)
            return await self._handlers[name].handle(arguments)
        except Exception as e:
            logger.error("[dispatcher] error in tool %s: %s", tool_name, e)
            raise
