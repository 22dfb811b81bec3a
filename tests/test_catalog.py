"""
Tests for the static tool catalog.
"""

from rag_mcp.tools.catalog import initialize_result, list_tools, required_fields


def test_three_tools_in_order() -> None:
    assert [t.name for t in list_tools()] == ["query_rag", "search_documents", "get_index_info"]


def test_query_rag_schema() -> None:
    schema = list_tools()[0].input_schema
    assert schema["required"] == ["question"]
    assert schema["properties"]["question"]["minLength"] == 1
    assert schema["properties"]["question"]["maxLength"] == 1000


def test_search_documents_schema() -> None:
    schema = list_tools()[1].input_schema
    assert schema["required"] == ["query"]
    assert schema["properties"]["query"]["maxLength"] == 500
    top_k = schema["properties"]["top_k"]
    assert (top_k["type"], top_k["minimum"], top_k["maximum"], top_k["default"]) == ("integer", 1, 10, 5)


def test_get_index_info_forbids_extra_properties() -> None:
    schema = list_tools()[2].input_schema
    assert schema["properties"] == {}
    assert schema["additionalProperties"] is False
    assert "required" not in schema


def test_catalog_is_unchanged_across_calls() -> None:
    first = list_tools()
    first[0].input_schema["required"].append("tampered")
    assert list_tools()[0].input_schema["required"] == ["question"]
    assert [t.model_dump() for t in list_tools()] == [t.model_dump() for t in list_tools()]


def test_required_fields() -> None:
    assert required_fields("query_rag") == ["question"]
    assert required_fields("get_index_info") == []
    assert required_fields("nope") == []


def test_initialize_result() -> None:
    result = initialize_result()
    assert result["protocolVersion"] == "2024-11-05"
    assert result["serverInfo"] == {"name": "llamacloud-rag-server", "version": "1.0.0"}
    assert result["capabilities"]["tools"]["listChanged"] is True
