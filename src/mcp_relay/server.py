"""MCP Relay server - shared Jira and brand guideline tools for AI assistants."""
import asyncio
import sys
from typing import Any

import httpx
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from . import __version__, brand, jira
from .brand.client import create_s3_client
from .config import ServerConfig, load_config
from .errors import ConfigurationError
from .logger import configure_logging, log
from .registry import ToolContext, ToolRegistry

SERVER_NAME = "mcp-relay"

INSTRUCTIONS = """\
MCP Relay provides shared AI tooling for teams.
Available integrations: Jira (issue CRUD and JQL search)
and Brand Guidelines (per-project config from S3).
Tools use shared credentials - individual users do not
need their own API keys."""


def build_registry() -> ToolRegistry:
    """Register every tool exposed by the relay."""
    registry = ToolRegistry()
    registry.register_all(jira.get_tools())
    registry.register_all(brand.get_tools())
    return registry


def create_server(config: ServerConfig, http: httpx.AsyncClient, s3: Any) -> Server:
    """Create the MCP server with all tools registered."""
    app = Server(SERVER_NAME, version=__version__, instructions=INSTRUCTIONS)
    registry = build_registry()
    context = ToolContext(server=app, config=config, http=http, s3=s3)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List available MCP tools."""
        return registry.list_tools()

    # Arguments are validated by the registry against each tool's pydantic model
    @app.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Route MCP tool calls to their handlers."""
        return await registry.invoke(name, arguments, context)

    return app


async def main() -> None:
    """Run the MCP server on stdio."""
    configure_logging()

    try:
        config = load_config()
    except ConfigurationError as e:
        log("error", e.message, e.metadata)
        sys.exit(1)

    configure_logging(config.runtime.log_level)

    timeout = httpx.Timeout(config.runtime.http_timeout_ms / 1000)
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=False) as http:
        s3 = create_s3_client(config.s3, config.runtime.http_timeout_ms)
        app = create_server(config, http, s3)

        async with stdio_server() as (read_stream, write_stream):
            log("info", "MCP server started on stdio transport")
            await app.run(read_stream, write_stream, app.create_initialization_options())


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
