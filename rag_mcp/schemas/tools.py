"""Schemas for tool discovery and tool-call envelopes."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    """Static tool description advertised on list tools."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(..., serialization_alias="inputSchema")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Wire-level result of a tool call: a single text content item."""

    content: list[TextContent]

    @classmethod
    def from_text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        return self.content[0].text if self.content else ""


class ToolCallRequest(BaseModel):
    """Request body for POST /mcp/tools/{name}. Arguments may be omitted entirely."""

    arguments: dict[str, Any] | None = Field(None, description="Tool arguments keyed by field name.")
