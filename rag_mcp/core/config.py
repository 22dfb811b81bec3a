"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from rag_mcp.core.errors import ConfigurationError

load_dotenv()

# Server identity advertised on initialize
SERVER_NAME: str = "llamacloud-rag-server"
SERVER_VERSION: str = "1.0.0"
PROTOCOL_VERSION: str = "2024-11-05"

# LlamaCloud pipelines API
LLAMA_CLOUD_HOST: str = "api.cloud.llamaindex.ai"
PIPELINE_URL_TEMPLATE: str = "https://" + LLAMA_CLOUD_HOST + "/api/v1/pipelines/{pipeline_id}/retrieve"

# Retrieval defaults
DEFAULT_SIMILARITY_TOP_K: int = 5
SEARCH_MODE: str = "retrieve_only"

# Preview budgets (characters, before the ellipsis marker)
ANSWER_PREVIEW_CHARS: int = 150
SEARCH_PREVIEW_CHARS: int = 300
ANSWER_CONTEXT_LIMIT: int = 3

DEFAULT_INDEX_NAME: str = "dbms"
DEFAULT_PROJECT_NAME: str = "Default"
INDEX_DESCRIPTION: str = "Index with database and DBMS documents"

# API timeout (seconds)
DEFAULT_HTTP_TIMEOUT: float = 30.0

LOG_LEVEL: str = (os.getenv("LOG_LEVEL", "INFO").strip() or "INFO").upper()


class Settings(BaseModel):
    """Immutable runtime configuration, built once at process entry."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    pipeline_url: str
    pipeline_id: str | None = None
    index_name: str = DEFAULT_INDEX_NAME
    project_name: str = DEFAULT_PROJECT_NAME
    organization_id: str
    http_timeout: float = DEFAULT_HTTP_TIMEOUT


def resolve_pipeline_url(pipeline_url: str, pipeline_id: str) -> str:
    """Explicit URL wins; otherwise synthesize from the pipeline id. Empty when neither is set."""
    if pipeline_url:
        return pipeline_url
    if pipeline_id:
        return PIPELINE_URL_TEMPLATE.format(pipeline_id=pipeline_id)
    return ""


def _parse_timeout(raw: str) -> float:
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"LLAMA_CLOUD_TIMEOUT must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"LLAMA_CLOUD_TIMEOUT must be positive, got {raw!r}")
    return value


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """
    Build Settings from the environment (or the given mapping).

    Raises ConfigurationError naming every missing variable when the credential,
    organization id or a resolvable pipeline endpoint is absent.
    """
    env = os.environ if environ is None else environ

    def read(name: str) -> str:
        return (env.get(name) or "").strip()

    api_key = read("LLAMA_CLOUD_API_KEY")
    organization_id = read("LLAMA_CLOUD_ORGANIZATION_ID")
    pipeline_id = read("LLAMA_CLOUD_PIPELINE_ID")
    pipeline_url = resolve_pipeline_url(read("LLAMA_CLOUD_PIPELINE_URL"), pipeline_id)

    missing = []
    if not api_key:
        missing.append("LLAMA_CLOUD_API_KEY")
    if not organization_id:
        missing.append("LLAMA_CLOUD_ORGANIZATION_ID")
    if not pipeline_url:
        missing.append("LLAMA_CLOUD_PIPELINE_ID (or LLAMA_CLOUD_PIPELINE_URL)")
    if missing:
        raise ConfigurationError(
            "Missing required environment variables for LlamaCloud MCP server: " + ", ".join(missing),
            missing=missing,
        )

    return Settings(
        api_key=api_key,
        pipeline_url=pipeline_url,
        pipeline_id=pipeline_id or None,
        index_name=read("LLAMA_CLOUD_INDEX_NAME") or DEFAULT_INDEX_NAME,
        project_name=read("LLAMA_CLOUD_PROJECT_NAME") or DEFAULT_PROJECT_NAME,
        organization_id=organization_id,
        http_timeout=_parse_timeout(read("LLAMA_CLOUD_TIMEOUT")),
    )
