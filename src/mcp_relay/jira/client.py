"""Jira REST API v3 client.

Single point of credential handling for Jira: the Basic auth header is built
here from server-held settings, never from tool arguments.

Expected failures (401, 403, 404) come back as a ClientFailure holding a
generic, caller-safe error result. Any other non-2xx status, and any body
that is not valid JSON, raises ExternalServiceError for the handler's
catch-all.
"""
import base64
import json
from typing import Any, Optional

from ..errors import CallMetadata, ExternalServiceError
from ..http_client import http_request
from ..registry import ToolContext
from ..results import ClientFailure, ClientResult, ClientSuccess, error_result

AUTH_FAILED_MESSAGE = "Jira authentication failed. Check the configured credentials."
PERMISSION_DENIED_MESSAGE = (
    "Permission denied when accessing Jira. The configured user may lack access."
)
NOT_FOUND_MESSAGE = "The requested Jira resource was not found. Check the identifier and try again."


def _auth_header(context: ToolContext) -> str:
    jira = context.config.jira
    credentials = f"{jira.user_email}:{jira.api_token.get_secret_value()}"
    return "Basic " + base64.b64encode(credentials.encode()).decode()


async def jira_request(
    context: ToolContext,
    path: str,
    *,
    method: str = "GET",
    body: Optional[Any] = None,
    metadata: CallMetadata,
    not_found_message: Optional[str] = None,
) -> ClientResult:
    """Send an authenticated request to the Jira REST API.

    Args:
        context: Shared tool context (config and HTTP client)
        path: API path including any query string, e.g. ``/rest/api/3/issue/PROJ-1``
        method: HTTP method
        body: JSON-serialisable request body, if any
        metadata: Call metadata of the invoking tool
        not_found_message: Message returned to the caller on 404

    Returns:
        ClientSuccess with the parsed (unvalidated) JSON payload, or
        ClientFailure for 401/403/404

    Raises:
        ExternalServiceError: for transport failures, other non-2xx statuses,
            or unparseable response bodies
    """
    headers = {
        "Authorization": _auth_header(context),
        "Accept": "application/json",
    }
    content = None
    if body is not None:
        headers["Content-Type"] = "application/json"
        content = json.dumps(body)

    response = await http_request(
        context.http,
        context.config.jira.url_for(path),
        method=method,
        headers=headers,
        body=content,
        timeout_ms=context.config.runtime.http_timeout_ms,
        metadata=metadata,
    )

    if response.status == 401:
        return ClientFailure(error_result(AUTH_FAILED_MESSAGE), "authentication_failed")

    if response.status == 403:
        return ClientFailure(error_result(PERMISSION_DENIED_MESSAGE), "permission_denied")

    if response.status == 404:
        return ClientFailure(error_result(not_found_message or NOT_FOUND_MESSAGE), "not_found")

    if not 200 <= response.status < 300:
        raise ExternalServiceError(
            f"Jira API returned unexpected status {response.status}",
            metadata,
            status_code=response.status,
        )

    # 204 No Content (e.g. issue update) has no body to parse
    if not response.body.strip():
        return ClientSuccess(None)

    try:
        data = json.loads(response.body)
    except ValueError as e:
        raise ExternalServiceError(
            "Failed to parse Jira API response as JSON", metadata, status_code=response.status
        ) from e

    return ClientSuccess(data)
