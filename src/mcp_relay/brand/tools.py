"""MCP tool definitions for brand guidelines."""
from mcp.types import ToolAnnotations

from ..registry import ToolDefinition
from . import handlers
from .schemas import GetGuidelinesArguments


def get_tools() -> list[ToolDefinition]:
    """Get the list of brand guideline tools."""
    return [
        ToolDefinition(
            name=handlers.GET_GUIDELINES,
            description="Fetch brand guidelines configuration for a project from S3 "
                        "(colours, typography, tone).",
            input_model=GetGuidelinesArguments,
            annotations=ToolAnnotations(
                readOnlyHint=True,
                destructiveHint=False,
                openWorldHint=True,
                idempotentHint=True,
            ),
            handler=handlers.handle_get_guidelines,
        ),
    ]
