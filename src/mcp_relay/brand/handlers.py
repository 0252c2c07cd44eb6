"""Brand guidelines tool handler."""
import time

from mcp.types import CallToolResult

from ..errors import CallMetadata, describe_error
from ..logger import elapsed_ms, log
from ..registry import ToolContext
from ..results import ClientFailure, error_result, text_result
from ..validation import parse_response
from .client import fetch_json_object, guidelines_key
from .formatters import format_brand_guidelines
from .schemas import BrandGuidelinesConfig, GetGuidelinesArguments

GET_GUIDELINES = "brand_get_guidelines"


async def handle_get_guidelines(args: GetGuidelinesArguments, context: ToolContext) -> CallToolResult:
    """Fetch the brand guidelines document for a project."""
    project_id = args.project_id
    metadata = CallMetadata.new(GET_GUIDELINES, "get_guidelines")
    started = time.perf_counter()

    log("info", f"Fetching brand guidelines for {project_id}", metadata)

    try:
        result = await fetch_json_object(
            context,
            guidelines_key(project_id),
            metadata=metadata,
            not_found_message=f"No brand guidelines found for project {project_id}. Check the project id and try again.",
        )

        if isinstance(result, ClientFailure):
            log(
                "warn",
                f"Brand guidelines request failed for {project_id}",
                metadata,
                reason=result.reason,
                duration_ms=elapsed_ms(started),
            )
            return result.response

        config = parse_response(BrandGuidelinesConfig, result.data, metadata)
        text = format_brand_guidelines(config)

        log("info", f"Fetched brand guidelines for {project_id}", metadata, duration_ms=elapsed_ms(started))
        return text_result(text)

    except Exception as e:
        log(
            "error",
            f"Failed to fetch brand guidelines for {project_id}",
            metadata,
            duration_ms=elapsed_ms(started),
            **describe_error(e),
        )
        return error_result(
            f"An error occurred while fetching brand guidelines for {project_id}. Check server logs for details."
        )
