"""
Tool handlers: one per catalog entry, all behind the same `handle(arguments)` interface.

Each handler reads only its declared fields, calls the upstream client, normalizes
and renders. Bounds declared in the catalog schema are not re-enforced here.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol

from rag_mcp.core.config import DEFAULT_SIMILARITY_TOP_K, INDEX_DESCRIPTION, SEARCH_MODE, Settings
from rag_mcp.schemas.results import IndexInfo
from rag_mcp.schemas.tools import ToolResult
from rag_mcp.services.llamacloud_client import LlamaCloudClient
from rag_mcp.services.normalizer import normalize_for_answer, normalize_for_search
from rag_mcp.services.renderer import render

logger = logging.getLogger(__name__)


class ToolName(str, Enum):
    QUERY_RAG = "query_rag"
    SEARCH_DOCUMENTS = "search_documents"
    GET_INDEX_INFO = "get_index_info"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ToolContext:
    """Everything a handler may use: read-only settings and collaborator handles."""

    settings: Settings
    client: LlamaCloudClient
    clock: Callable[[], datetime] = field(default=_utcnow)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ToolContext":
        return cls(settings=settings, client=LlamaCloudClient(settings))


class ToolHandler(Protocol):
    async def handle(self, arguments: Mapping[str, Any]) -> ToolResult: ...


class QueryRagHandler:
    def __init__(self, context: ToolContext) -> None:
        self._context = context

    async def handle(self, arguments: Mapping[str, Any]) -> ToolResult:
        question = arguments["question"]
        logger.info("[tools:query_rag] IN  question=%r", question)
        data = await self._context.client.retrieve(question, DEFAULT_SIMILARITY_TOP_K)
        result = normalize_for_answer(data, question)
        logger.info("[tools:query_rag] OUT sources=%d", result.total_sources)
        return ToolResult.from_text(render(result))


class SearchDocumentsHandler:
    def __init__(self, context: ToolContext) -> None:
        self._context = context

    async def handle(self, arguments: Mapping[str, Any]) -> ToolResult:
        query = arguments["query"]
        top_k = arguments.get("top_k")
        if top_k is None:
            top_k = DEFAULT_SIMILARITY_TOP_K
        logger.info("[tools:search_documents] IN  query=%r top_k=%s", query, top_k)
        data = await self._context.client.retrieve(query, top_k, mode=SEARCH_MODE)
        result = normalize_for_search(data, query)
        logger.info("[tools:search_documents] OUT documents=%d", result.total_found)
        return ToolResult.from_text(render(result))


class GetIndexInfoHandler:
    def __init__(self, context: ToolContext) -> None:
        self._context = context

    def index_info(self) -> IndexInfo:
        settings = self._context.settings
        return IndexInfo(
            name=settings.index_name,
            project=settings.project_name,
            organization_id=settings.organization_id,
            pipeline_url=settings.pipeline_url,
            status="active",
            description=INDEX_DESCRIPTION,
            last_updated=self._context.clock(),
        )

    async def handle(self, arguments: Mapping[str, Any]) -> ToolResult:
        logger.info("[tools:get_index_info] IN")
        return ToolResult.from_text(render(self.index_info()))


HANDLER_TYPES: dict[ToolName, type] = {
    ToolName.QUERY_RAG: QueryRagHandler,
    ToolName.SEARCH_DOCUMENTS: SearchDocumentsHandler,
    ToolName.GET_INDEX_INFO: GetIndexInfoHandler,
}


def build_handlers(context: ToolContext) -> dict[ToolName, ToolHandler]:
    return {name: handler_type(context) for name, handler_type in HANDLER_TYPES.items()}
