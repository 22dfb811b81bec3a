"""Normalized result models produced by the normalizer and consumed by the renderer."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class SourceRecord(BaseModel):
    """One retrieved node, as cited under a query_rag answer."""

    id: int = Field(..., ge=1, description="1-based ordinal in order of appearance.")
    filename: str = Field(..., description="file_name / filename metadata, else 'Document {id}'.")
    score: float = Field(0.0, description="Relevance score; 0 when upstream omits it.")
    preview: str = Field("", description="Truncated text with a trailing ellipsis.")


class DocumentRecord(BaseModel):
    """One retrieved node as returned by search_documents (longer preview, raw metadata)."""

    id: int = Field(..., ge=1)
    filename: str
    score: float = 0.0
    content: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class QueryResult(BaseModel):
    answer: str = ""
    sources: list[SourceRecord] = Field(default_factory=list)
    total_sources: int = 0
    query: str


class SearchResult(BaseModel):
    query: str
    documents: list[DocumentRecord] = Field(default_factory=list)
    total_found: int = 0


class IndexInfo(BaseModel):
    """Index metadata; computed fresh on every get_index_info call."""

    name: str
    project: str
    organization_id: str
    pipeline_url: str
    status: str = "active"
    description: str
    last_updated: datetime
