"""
Tests for the upstream retrieval client, using httpx.MockTransport (no network).
"""

import asyncio
import json
import logging

import httpx
import pytest

from rag_mcp.core.config import Settings
from rag_mcp.core.errors import TransportError, UpstreamStatusError
from rag_mcp.services.llamacloud_client import LlamaCloudClient, build_retrieval_payload


def _client(settings: Settings, handler) -> LlamaCloudClient:
    return LlamaCloudClient(settings, transport=httpx.MockTransport(handler))


def test_build_payload_omits_mode_by_default() -> None:
    assert build_retrieval_payload("q") == {"query": "q", "similarity_top_k": 5}
    assert build_retrieval_payload("q", 2, "retrieve_only") == {
        "query": "q",
        "similarity_top_k": 2,
        "mode": "retrieve_only",
    }


def test_retrieve_posts_query_with_bearer(settings: Settings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"retrieval_nodes": []})

    data = asyncio.run(_client(settings, handler).retrieve("what is a dbms"))

    assert data == {"retrieval_nodes": []}
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == settings.pipeline_url
    assert request.headers["Authorization"] == "Bearer llx-test"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"query": "what is a dbms", "similarity_top_k": 5}


def test_retrieve_forwards_top_k_and_mode(settings: Settings) -> None:
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={})

    asyncio.run(_client(settings, handler).retrieve("q", 2, mode="retrieve_only"))
    assert bodies == [{"query": "q", "similarity_top_k": 2, "mode": "retrieve_only"}]


def test_non_success_status_raises_upstream_status_error(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"detail": "bad key"})

    with pytest.raises(UpstreamStatusError) as exc:
        asyncio.run(_client(settings, handler).retrieve("q"))
    assert exc.value.status_code == 401
    assert exc.value.status_text == "Unauthorized"
    assert exc.value.message == "LlamaCloud API error: 401 Unauthorized"


def test_network_failure_raises_transport_error(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError):
        asyncio.run(_client(settings, handler).retrieve("q"))


def test_non_json_body_raises_transport_error(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(TransportError):
        asyncio.run(_client(settings, handler).retrieve("q"))


def test_non_integer_top_k_is_forwarded_and_logged(settings: Settings, caplog) -> None:
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={})

    with caplog.at_level(logging.INFO, logger="rag_mcp.services.llamacloud_client"):
        asyncio.run(_client(settings, handler).retrieve("q", "3"))

    assert bodies == [{"query": "q", "similarity_top_k": "3"}]
    messages = [record.getMessage() for record in caplog.records]
    assert any("top_k=3" in message for message in messages)
