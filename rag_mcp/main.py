"""
Process entry: load settings, run the startup self-check, serve tools.

    llamacloud-rag-mcp                      # stdio MCP server (default)
    llamacloud-rag-mcp --transport http     # FastAPI on --host/--port
    uvicorn --factory rag_mcp.main:create_app
"""

import argparse
import asyncio
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rag_mcp.api.routes import mcp_router, router
from rag_mcp.core.config import LOG_LEVEL, load_settings
from rag_mcp.core.errors import ConfigurationError, RagServerError
from rag_mcp.tools.dispatcher import ToolDispatcher
from rag_mcp.tools.handlers import ToolContext

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL) -> None:
    # stdout carries the stdio protocol, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


async def self_check(context: ToolContext) -> bool:
    """One exploratory retrieval; failure is a warning, never fatal."""
    try:
        await context.client.retrieve("test connection")
    except RagServerError as e:
        logger.warning("Could not verify LlamaCloud connection: %s", e)
        return False
    logger.info("LlamaCloud connection verified")
    return True


def create_app(context: ToolContext | None = None) -> FastAPI:
    """Build the HTTP app. Without a context, settings are loaded when the app starts."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "dispatcher", None) is None:
            ctx = ToolContext.from_settings(load_settings())
            await self_check(ctx)
            app.state.dispatcher = ToolDispatcher(ctx)
        yield

    app = FastAPI(title="LlamaCloud RAG Tool Server", lifespan=lifespan)
    if context is not None:
        app.state.dispatcher = ToolDispatcher(context)
    app.include_router(router)
    app.include_router(mcp_router, prefix="/mcp")
    return app


async def run_stdio(context: ToolContext) -> None:
    from rag_mcp.tools.stdio_server import serve_stdio

    logger.info("Starting LlamaCloud RAG MCP Server...")
    await self_check(context)
    await serve_stdio(ToolDispatcher(context))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="LlamaCloud RAG tool server")
    parser.add_argument("--transport", choices=("stdio", "http"), default="stdio")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1

    context = ToolContext.from_settings(settings)
    if args.transport == "http":
        import uvicorn

        app = create_app(context)
        asyncio.run(self_check(context))
        uvicorn.run(app, host=args.host, port=args.port)
        return 0

    try:
        asyncio.run(run_stdio(context))
    except KeyboardInterrupt:
        logger.info("Shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
