"""MCP result helpers and the envelope returned by upstream clients.

Upstream clients return either ClientSuccess (raw, unvalidated payload) or
ClientFailure (an already formatted error result for an expected failure such
as 401/403/404). Anything unexpected is raised instead.
"""
from dataclasses import dataclass
from typing import Any, Literal, Union

from mcp.types import CallToolResult, TextContent

FailureReason = Literal["authentication_failed", "permission_denied", "not_found"]


def text_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=False)


def error_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=True)


@dataclass(frozen=True)
class ClientSuccess:
    data: Any


@dataclass(frozen=True)
class ClientFailure:
    response: CallToolResult
    reason: FailureReason


ClientResult = Union[ClientSuccess, ClientFailure]
