"""Tool definitions, the shared invocation context, and the tool registry.

The registry is the seam between the MCP transport and the tool handlers:
it publishes the tool catalogue for ``tools/list`` and routes ``tools/call``
requests, validating arguments against each tool's input model before the
handler runs.
"""
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import httpx
from mcp.server import Server
from mcp.types import CallToolResult, Tool, ToolAnnotations
from pydantic import BaseModel

from .config import ServerConfig
from .errors import CallMetadata, ConfigurationError, SchemaValidationError, startup_metadata
from .logger import log
from .results import error_result
from .validation import parse_arguments

TOOL_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


@dataclass(frozen=True)
class ToolContext:
    """Per-process handles shared by every tool invocation.

    Holds no per-call state; all fields are read-only after startup.
    """

    server: Optional[Server]
    config: ServerConfig
    http: httpx.AsyncClient
    s3: Any  # botocore S3 client


Handler = Callable[[Any, ToolContext], Awaitable[CallToolResult]]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_model: type[BaseModel]
    annotations: ToolAnnotations
    handler: Handler

    def to_mcp(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_model.model_json_schema(by_alias=True),
            annotations=self.annotations,
        )


class ToolRegistry:
    """Append-only catalogue of tools, keyed by unique name."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition) -> None:
        """Add a tool.

        Raises:
            ConfigurationError: if the name is malformed or already registered
        """
        if not TOOL_NAME_PATTERN.match(tool.name):
            raise ConfigurationError(
                f"Invalid tool name {tool.name!r}",
                startup_metadata("register_tool", tool.name),
            )
        if tool.name in self._tools:
            raise ConfigurationError(
                f"Tool {tool.name!r} is already registered",
                startup_metadata("register_tool", tool.name),
            )
        self._tools[tool.name] = tool

    def register_all(self, tools: list[ToolDefinition]) -> None:
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[Tool]:
        return [tool.to_mcp() for tool in self._tools.values()]

    async def invoke(self, name: str, arguments: Any, context: ToolContext) -> CallToolResult:
        """Validate arguments and run the named tool's handler."""
        tool = self._tools.get(name)
        if tool is None:
            log("warn", f"Unknown tool requested: {name}")
            return error_result(f"Unknown tool: {name}")

        try:
            args = parse_arguments(
                tool.input_model,
                arguments,
                CallMetadata.new(tool.name, "validate_arguments"),
            )
        except SchemaValidationError as e:
            log("warn", "Rejected invalid tool arguments", e.metadata, issues=e.issues)
            details = "\n".join(f"- {issue}" for issue in e.issues)
            return error_result(f"Invalid arguments for {name}:\n{details}")

        return await tool.handler(args, context)
