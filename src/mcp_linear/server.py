import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from mcp.server import Server
from mcp.shared.exceptions import McpError
from mcp.types import (
    METHOD_NOT_FOUND,
    CallToolRequest,
    ErrorData,
    ServerResult,
    Tool,
)

from . import __version__
from .exceptions import UnknownToolError
from .linear import LinearFetcher
from .linear.config import LinearConfig
from .tools import ToolDispatcher, list_tool_specs
from .utils.logging import log_config_param

# Configure logging
logger = logging.getLogger("mcp-linear")


@dataclass
class AppContext:
    """Application context for MCP Linear."""

    linear: LinearFetcher
    config: LinearConfig


@asynccontextmanager
async def server_lifespan(
    server: Server, config: LinearConfig
) -> AsyncIterator[AppContext]:
    """Initialize and clean up application resources."""
    logger.info(f"Starting MCP Linear server ({config.server_name})")
    log_config_param(logger, "Linear", "API URL", config.api_url)
    log_config_param(logger, "Linear", "API Key", config.api_key, sensitive=True)
    log_config_param(logger, "Linear", "Team Name", config.team_name)
    log_config_param(logger, "Linear", "Timeout", str(config.timeout))
    log_config_param(logger, "Linear", "Max Concurrency", str(config.max_concurrency))
    logger.info(f"Read-only mode: {'ENABLED' if config.read_only else 'DISABLED'}")

    linear = LinearFetcher(config=config)
    try:
        yield AppContext(linear=linear, config=config)
    finally:
        await linear.aclose()
        logger.info("Linear client closed")


def create_app(config: LinearConfig) -> Server:
    """
    Build the MCP server for a Linear configuration.

    Args:
        config: Linear configuration shared by every request

    Returns:
        Low-level MCP server with the tool listing and tool call handlers
    """
    app: Server = Server(
        config.server_name,
        version=__version__,
        lifespan=lambda server: server_lifespan(server, config),
    )

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List available Linear tools."""
        ctx: AppContext = app.request_context.lifespan_context
        return [spec.to_tool() for spec in list_tool_specs(ctx.config.read_only)]

    async def call_tool(request: CallToolRequest) -> ServerResult:
        """Handle tool calls for Linear operations.

        Unknown tools are reported as a protocol error; every other failure
        is returned as error-flagged tool content.
        """
        ctx: AppContext = app.request_context.lifespan_context
        dispatcher = ToolDispatcher(ctx.linear, read_only=ctx.config.read_only)
        try:
            result = await dispatcher.dispatch(
                request.params.name, request.params.arguments
            )
        except UnknownToolError as e:
            raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=str(e))) from e
        return ServerResult(result)

    # Registered directly: the call_tool() decorator would turn the unknown
    # tool error into tool content instead of a JSON-RPC error.
    app.request_handlers[CallToolRequest] = call_tool

    return app


async def run_server(
    config: LinearConfig, transport: str = "stdio", port: int = 8000
) -> None:
    """Run the MCP Linear server with the specified transport."""
    app = create_app(config)

    if transport == "sse":
        from mcp.server.sse import SseServerTransport
        from starlette.applications import Starlette
        from starlette.requests import Request
        from starlette.responses import Response
        from starlette.routing import Mount, Route

        sse = SseServerTransport("/messages/")

        async def handle_sse(request: Request) -> Response:
            async with sse.connect_sse(
                request.scope, request.receive, request._send
            ) as streams:
                await app.run(
                    streams[0], streams[1], app.create_initialization_options()
                )
            return Response()

        starlette_app = Starlette(
            routes=[
                Route("/sse", endpoint=handle_sse),
                Mount("/messages/", app=sse.handle_post_message),
            ],
        )

        import uvicorn

        # Set up uvicorn config
        uvicorn_config = uvicorn.Config(starlette_app, host="0.0.0.0", port=port)  # noqa: S104
        server = uvicorn.Server(uvicorn_config)
        # Use server.serve() instead of run() to stay in the same event loop
        await server.serve()
    else:
        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream, write_stream, app.create_initialization_options()
            )
