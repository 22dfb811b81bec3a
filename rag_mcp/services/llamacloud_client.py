"""
Upstream retrieval client for a LlamaCloud pipeline.

Responsibility: POST one similarity query to the configured pipeline endpoint with
the bearer credential and return the decoded JSON body. No retries, no caching.
"""

import logging
from typing import Any

import httpx

from rag_mcp.core.config import DEFAULT_SIMILARITY_TOP_K, Settings
from rag_mcp.core.errors import TransportError, UpstreamStatusError

logger = logging.getLogger(__name__)


def build_retrieval_payload(
    query: str, similarity_top_k: int = DEFAULT_SIMILARITY_TOP_K, mode: str | None = None
) -> dict[str, Any]:
    """Request body for the retrieve endpoint; mode is only sent when given."""
    payload: dict[str, Any] = {"query": query, "similarity_top_k": similarity_top_k}
    if mode:
        payload["mode"] = mode
    return payload


class LlamaCloudClient:
    """Async client for the pipeline retrieve endpoint."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def pipeline_url(self) -> str:
        return self._settings.pipeline_url

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Content-Type": "application/json",
        }

    async def retrieve(
        self,
        query: str,
        similarity_top_k: int = DEFAULT_SIMILARITY_TOP_K,
        mode: str | None = None,
    ) -> Any:
        """
        Run one retrieval against the pipeline.

        Raises TransportError when the request cannot complete or the body is not JSON,
        and UpstreamStatusError on a non-2xx answer.
        """
        payload = build_retrieval_payload(query, similarity_top_k, mode)
        logger.info("[llamacloud:retrieve] IN  query=%r top_k=%s mode=%s", query, similarity_top_k, mode)

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.http_timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._settings.pipeline_url, json=payload, headers=self._headers()
                )
        except httpx.HTTPError as e:
            logger.warning("[llamacloud:retrieve] request failed: %s", e)
            raise TransportError(f"LlamaCloud request failed: {e!s}") from e

        if not response.is_success:
            logger.warning(
                "[llamacloud:retrieve] upstream error %s: %s", response.status_code, response.text[:200]
            )
            raise UpstreamStatusError(response.status_code, response.reason_phrase)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError("LlamaCloud returned a non-JSON response body") from e

        logger.info("[llamacloud:retrieve] OUT status=%d", response.status_code)
        return data
