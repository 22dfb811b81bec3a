"""
Response normalizer: raw LlamaCloud payload -> QueryResult / SearchResult.

Responsibility: Classify the upstream payload into one of three known shapes and
build uniform source records from it. Never raises: unknown or partial payloads
degrade to empty/default fields.

Payload shapes:
    NewFormat     {"retrieval_nodes": [{"node": {...}}, ...]}
    LegacyFormat  {"answer"|"response": str, "source_nodes"|"sources": [{...}, ...]}
    Unrecognized  anything else (including {} and non-mapping bodies)
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from rag_mcp.core.config import ANSWER_CONTEXT_LIMIT, ANSWER_PREVIEW_CHARS, SEARCH_PREVIEW_CHARS
from rag_mcp.schemas.results import DocumentRecord, QueryResult, SearchResult, SourceRecord

logger = logging.getLogger(__name__)

NO_ANSWER = "No answer received."
ANSWER_INTRO = "Based on the found documents:\n\n"
CONTEXT_SEPARATOR = "\n\n---\n\n"
ELLIPSIS = "..."

_LEGACY_KEYS = ("answer", "response", "source_nodes", "sources")


@dataclass(frozen=True)
class NewFormat:
    nodes: list[Mapping[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class LegacyFormat:
    answer: str | None = None
    nodes: list[Mapping[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class Unrecognized:
    pass


Payload = NewFormat | LegacyFormat | Unrecognized


def _keep_nodes(items: Any) -> list[Mapping[str, Any]]:
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, Mapping)]


def classify_payload(payload: Any) -> Payload:
    """Tag the raw payload with its shape. retrieval_nodes must be a list to count as NewFormat."""
    if not isinstance(payload, Mapping):
        return Unrecognized()

    retrieval_nodes = payload.get("retrieval_nodes")
    if isinstance(retrieval_nodes, list):
        wrapped = [item.get("node") for item in retrieval_nodes if isinstance(item, Mapping)]
        return NewFormat(nodes=_keep_nodes(wrapped))

    if any(key in payload for key in _LEGACY_KEYS):
        answer = payload.get("answer") or payload.get("response") or None
        source_nodes = payload.get("source_nodes")
        nodes = source_nodes if source_nodes is not None else payload.get("sources")
        return LegacyFormat(answer=str(answer) if answer else None, nodes=_keep_nodes(nodes))

    return Unrecognized()


def node_text(node: Mapping[str, Any]) -> str:
    """text, else content, else empty string."""
    return str(node.get("text") or node.get("content") or "")


def node_filename(node: Mapping[str, Any], ordinal: int) -> str:
    metadata = node.get("metadata")
    if isinstance(metadata, Mapping):
        name = metadata.get("file_name") or metadata.get("filename")
        if name:
            return str(name)
    return f"Document {ordinal}"


def node_score(node: Mapping[str, Any]) -> float:
    score = node.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return 0.0
    return float(score)


def node_metadata(node: Mapping[str, Any]) -> dict[str, Any]:
    metadata = node.get("metadata")
    return dict(metadata) if isinstance(metadata, Mapping) else {}


def truncate_preview(text: str, budget: int) -> str:
    # The marker is appended even when text fits within budget.
    return text[:budget] + ELLIPSIS


def build_sources(nodes: list[Mapping[str, Any]], budget: int = ANSWER_PREVIEW_CHARS) -> list[SourceRecord]:
    return [
        SourceRecord(
            id=i,
            filename=node_filename(node, i),
            score=node_score(node),
            preview=truncate_preview(node_text(node), budget),
        )
        for i, node in enumerate(nodes, start=1)
    ]


def build_documents(nodes: list[Mapping[str, Any]], budget: int = SEARCH_PREVIEW_CHARS) -> list[DocumentRecord]:
    return [
        DocumentRecord(
            id=i,
            filename=node_filename(node, i),
            score=node_score(node),
            content=truncate_preview(node_text(node), budget),
            metadata=node_metadata(node),
        )
        for i, node in enumerate(nodes, start=1)
    ]


def compose_answer(nodes: list[Mapping[str, Any]], limit: int = ANSWER_CONTEXT_LIMIT) -> str:
    """Intro phrase + first `limit` non-blank node texts; empty when there are none."""
    contexts = [text for text in (node_text(node) for node in nodes) if text.strip()][:limit]
    if not contexts:
        return ""
    return ANSWER_INTRO + CONTEXT_SEPARATOR.join(contexts)


def normalize_for_answer(payload: Any, query: str) -> QueryResult:
    shape = classify_payload(payload)
    if isinstance(shape, NewFormat):
        answer = compose_answer(shape.nodes)
        sources = build_sources(shape.nodes)
    elif isinstance(shape, LegacyFormat):
        answer = shape.answer or NO_ANSWER
        sources = build_sources(shape.nodes)
    else:
        answer = NO_ANSWER
        sources = []

    logger.info(
        "[normalizer:answer] shape=%s sources=%d answer_len=%d",
        type(shape).__name__, len(sources), len(answer),
    )
    return QueryResult(answer=answer, sources=sources, total_sources=len(sources), query=query)


def normalize_for_search(payload: Any, query: str) -> SearchResult:
    """top_k is not enforced here; every node the upstream returns is kept."""
    shape = classify_payload(payload)
    if isinstance(shape, (NewFormat, LegacyFormat)):
        documents = build_documents(shape.nodes)
    else:
        documents = []

    logger.info("[normalizer:search] shape=%s documents=%d", type(shape).__name__, len(documents))
    return SearchResult(query=query, documents=documents, total_found=len(documents))
