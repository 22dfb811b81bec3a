"""
Result renderer: normalized results -> one Markdown text block.

This is the only formatting surface; tool calls always return a single text item.
"""

from datetime import datetime, timezone

from rag_mcp.schemas.results import IndexInfo, QueryResult, SearchResult


def format_score(score: float | None) -> str:
    return "n/a" if score is None else f"{score:.2f}"


def format_timestamp(value: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix, e.g. 2024-05-01T12:00:00.000Z."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def render_query_result(result: QueryResult) -> str:
    lines = [
        f"{s.id}. {s.filename} (relevance: {format_score(s.score)})\n   {s.preview}"
        for s in result.sources
    ]
    return f"**Answer:** {result.answer}\n\n**Sources ({result.total_sources}):**\n" + "\n".join(lines)


def render_search_result(result: SearchResult) -> str:
    blocks = [
        f"**{doc.id}. {doc.filename}** (relevance: {format_score(doc.score)})\n{doc.content}"
        for doc in result.documents
    ]
    return (
        f'**Search query:** "{result.query}"\n\n'
        f"**Found documents:** {result.total_found}\n\n"
        + "\n\n".join(blocks)
    )


def render_index_info(info: IndexInfo) -> str:
    return (
        "**LlamaCloud Index Information:**\n\n"
        f"• **Name:** {info.name}\n"
        f"• **Project:** {info.project}\n"
        f"• **Organization ID:** {info.organization_id}\n"
        f"• **Status:** {info.status}\n"
        f"• **Description:** {info.description}\n"
        f"• **Pipeline URL:** {info.pipeline_url}\n"
        f"• **Last checked:** {format_timestamp(info.last_updated)}"
    )


def render(result: QueryResult | SearchResult | IndexInfo) -> str:
    if isinstance(result, QueryResult):
        return render_query_result(result)
    if isinstance(result, SearchResult):
        return render_search_result(result)
    if isinstance(result, IndexInfo):
        return render_index_info(result)
    raise TypeError(f"Cannot render {type(result).__name__}")
