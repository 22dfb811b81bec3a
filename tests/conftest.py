"""Shared fixtures: settings and a tool context whose upstream client is mocked."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from rag_mcp.core.config import Settings
from rag_mcp.services.llamacloud_client import LlamaCloudClient
from rag_mcp.tools.handlers import ToolContext

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_key="llx-test",
        pipeline_url="https://api.cloud.llamaindex.ai/api/v1/pipelines/pipe-1/retrieve",
        pipeline_id="pipe-1",
        organization_id="org-1",
    )


@pytest.fixture
def client() -> AsyncMock:
    mock = AsyncMock(spec=LlamaCloudClient)
    mock.retrieve.return_value = {}
    return mock


@pytest.fixture
def context(settings: Settings, client: AsyncMock) -> ToolContext:
    return ToolContext(settings=settings, client=client, clock=lambda: FIXED_NOW)
