"""
Tool catalog: the fixed set of tools this server exposes.

The list is static for the process lifetime (no dynamic registration); callers
get deep copies so the advertised schemas cannot drift.
"""

from typing import Any

from rag_mcp.core.config import PROTOCOL_VERSION, SERVER_NAME, SERVER_VERSION
from rag_mcp.schemas.tools import ToolDescriptor

TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="query_rag",
        description="Query the database documents in LlamaCloud and get comprehensive answers with sources",
        input_schema={
            "type": "object",
            "properties": {
                "question": {
                    "type": "string",
                    "description": "Question about database concepts, management systems, or related topics",
                    "minLength": 1,
                    "maxLength": 1000,
                },
            },
            "required": ["question"],
            "additionalProperties": False,
        },
    ),
    ToolDescriptor(
        name="search_documents",
        description="Search for relevant documents in the knowledge base without generating an answer",
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query for semantic document retrieval",
                    "minLength": 1,
                    "maxLength": 500,
                },
                "top_k": {
                    "type": "integer",
                    "description": "Number of documents to return (1-10)",
                    "minimum": 1,
                    "maximum": 10,
                    "default": 5,
                },
            },
            "required": ["query"],
            "additionalProperties": False,
        },
    ),
    ToolDescriptor(
        name="get_index_info",
        description="Get detailed information about the LlamaCloud index and its current status",
        input_schema={
            "type": "object",
            "properties": {},
            "additionalProperties": False,
        },
    ),
)


def list_tools() -> list[ToolDescriptor]:
    return [tool.model_copy(deep=True) for tool in TOOLS]


def get_tool(name: str) -> ToolDescriptor | None:
    for tool in TOOLS:
        if tool.name == name:
            return tool.model_copy(deep=True)
    return None


def required_fields(name: str) -> list[str]:
    tool = get_tool(name)
    return list(tool.input_schema.get("required", [])) if tool else []


def initialize_result() -> dict[str, Any]:
    """Static capability/version descriptor returned on initialize."""
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {"tools": {"listChanged": True, "supportsProgress": False}},
        "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
    }
