"""
Integration tests for the HTTP tool endpoints.

Uses a mocked upstream client so tests do not require LlamaCloud.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from rag_mcp.core.errors import TransportError, UpstreamStatusError
from rag_mcp.main import create_app
from rag_mcp.tools.handlers import ToolContext


@pytest.fixture
def http(context: ToolContext) -> TestClient:
    return TestClient(create_app(context))


def test_health(http: TestClient) -> None:
    assert http.get("/health").json() == {"ok": True}


def test_initialize(http: TestClient) -> None:
    response = http.post("/mcp/initialize")
    assert response.status_code == 200
    assert response.json()["serverInfo"]["name"] == "llamacloud-rag-server"


def test_list_tools(http: TestClient) -> None:
    response = http.get("/mcp/tools")
    assert response.status_code == 200
    tools = response.json()["tools"]
    assert [t["name"] for t in tools] == ["query_rag", "search_documents", "get_index_info"]
    assert tools[0]["inputSchema"]["required"] == ["question"]


def test_query_rag_returns_single_text_item(http: TestClient, client: AsyncMock) -> None:
    client.retrieve.return_value = {
        "retrieval_nodes": [
            {"node": {"text": "DBMS basics", "score": 0.9, "metadata": {"file_name": "intro.pdf"}}}
        ]
    }
    response = http.post("/mcp/tools/query_rag", json={"arguments": {"question": "what is a dbms"}})
    assert response.status_code == 200
    content = response.json()["content"]
    assert len(content) == 1
    assert content[0]["type"] == "text"
    assert "1. intro.pdf (relevance: 0.90)" in content[0]["text"]


def test_call_without_arguments_returns_422(http: TestClient) -> None:
    response = http.post("/mcp/tools/get_index_info")
    assert response.status_code == 422
    assert response.json()["detail"] == "No arguments provided for tool get_index_info"


def test_unknown_tool_returns_404(http: TestClient) -> None:
    response = http.post("/mcp/tools/drop_index", json={"arguments": {}})
    assert response.status_code == 404
    assert response.json()["detail"] == "Unknown tool: drop_index"


@pytest.mark.parametrize(
    "error", [UpstreamStatusError(503, "Service Unavailable"), TransportError("connection refused")]
)
def test_upstream_failure_returns_502(http: TestClient, client: AsyncMock, error) -> None:
    client.retrieve.side_effect = error
    response = http.post("/mcp/tools/search_documents", json={"arguments": {"query": "joins"}})
    assert response.status_code == 502
    assert response.json()["detail"] == error.message
