"""Jira tool handlers.

All handlers follow the same pipeline:
- Accept: validated arguments model and the shared ToolContext
- Create fresh CallMetadata and log the start of the call
- Call jira_request; a ClientFailure is logged as a warning and returned as-is
- Validate the payload, format it, and return a text result
- Anything raised is caught once at the end, logged with full detail, and
  returned as a generic error that reveals nothing about internals
"""
import time
from urllib.parse import quote, urlencode

from mcp.types import CallToolResult

from ..errors import CallMetadata, ExternalServiceError, describe_error
from ..logger import elapsed_ms, log
from ..registry import ToolContext
from ..results import ClientFailure, error_result, text_result
from ..validation import parse_response
from . import formatters
from .client import jira_request
from .schemas import (
    CreateIssueArguments,
    GetIssueArguments,
    JiraCreatedIssue,
    JiraIssue,
    JiraSearchResponse,
    SearchIssuesArguments,
    UpdateIssueArguments,
)

GET_ISSUE = "jira_get_issue"
SEARCH_ISSUES = "jira_search_issues"
CREATE_ISSUE = "jira_create_issue"
UPDATE_ISSUE = "jira_update_issue"

# Requested explicitly to keep responses small (Jira returns 200+ fields otherwise)
ISSUE_FIELDS = [
    "summary",
    "status",
    "assignee",
    "priority",
    "issuetype",
    "description",
    "created",
    "updated",
]


def _issue_path(issue_key: str) -> str:
    return f"/rest/api/3/issue/{quote(issue_key, safe='')}"


async def handle_get_issue(args: GetIssueArguments, context: ToolContext) -> CallToolResult:
    """Fetch a single issue by key."""
    issue_key = args.issue_key
    metadata = CallMetadata.new(GET_ISSUE, "get_issue")
    started = time.perf_counter()

    log("info", f"Fetching Jira issue {issue_key}", metadata)

    try:
        query = urlencode({"fields": ",".join(ISSUE_FIELDS)})
        result = await jira_request(
            context,
            f"{_issue_path(issue_key)}?{query}",
            metadata=metadata,
            not_found_message=f"Jira issue {issue_key} was not found. Check the issue key and try again.",
        )

        if isinstance(result, ClientFailure):
            log(
                "warn",
                f"Jira request failed for {issue_key}",
                metadata,
                reason=result.reason,
                duration_ms=elapsed_ms(started),
            )
            return result.response

        issue = parse_response(JiraIssue, result.data, metadata)
        text = formatters.format_issue(issue)

        log("info", f"Fetched issue {issue_key}", metadata, duration_ms=elapsed_ms(started))
        return text_result(text)

    except Exception as e:
        log(
            "error",
            f"Failed to fetch issue {issue_key}",
            metadata,
            duration_ms=elapsed_ms(started),
            **describe_error(e),
        )
        return error_result(
            f"An error occurred while fetching Jira issue {issue_key}. Check server logs for details."
        )


async def handle_search_issues(args: SearchIssuesArguments, context: ToolContext) -> CallToolResult:
    """Search issues with JQL.

    Jira answers malformed JQL with 400, which gets its own message.
    """
    metadata = CallMetadata.new(SEARCH_ISSUES, "search_issues")
    started = time.perf_counter()

    log("info", "Searching Jira issues with JQL", metadata, max_results=args.max_results)

    try:
        result = await jira_request(
            context,
            "/rest/api/3/search/jql",
            method="POST",
            body={"jql": args.jql, "maxResults": args.max_results, "fields": ISSUE_FIELDS},
            metadata=metadata,
        )

        if isinstance(result, ClientFailure):
            log(
                "warn",
                "Jira search request failed",
                metadata,
                reason=result.reason,
                duration_ms=elapsed_ms(started),
            )
            return result.response

        page = parse_response(JiraSearchResponse, result.data, metadata)
        text = formatters.format_search_results(page)

        log(
            "info",
            f"Search returned {len(page.issues)} issue(s)",
            metadata,
            duration_ms=elapsed_ms(started),
        )
        return text_result(text)

    except Exception as e:
        if isinstance(e, ExternalServiceError) and e.status_code == 400:
            log(
                "warn",
                "Invalid JQL query",
                metadata,
                duration_ms=elapsed_ms(started),
                **describe_error(e),
            )
            return error_result("Invalid JQL query. Check the syntax and field names, then try again.")

        log(
            "error",
            "Failed to search Jira issues",
            metadata,
            duration_ms=elapsed_ms(started),
            **describe_error(e),
        )
        return error_result(
            "An error occurred while searching Jira issues. Check server logs for details."
        )


async def handle_create_issue(args: CreateIssueArguments, context: ToolContext) -> CallToolResult:
    """Create an issue in a project.

    A plain-text description is converted to ADF before sending.
    """
    metadata = CallMetadata.new(CREATE_ISSUE, "create_issue")
    started = time.perf_counter()

    log("info", f"Creating Jira issue in project {args.project}", metadata)

    try:
        fields = {
            "project": {"key": args.project},
            "summary": args.summary,
            "issuetype": {"name": args.issue_type},
        }
        if args.description:
            fields["description"] = formatters.text_to_adf(args.description)

        result = await jira_request(
            context,
            "/rest/api/3/issue",
            method="POST",
            body={"fields": fields},
            metadata=metadata,
            not_found_message=f"Project {args.project} was not found. Check the project key and try again.",
        )

        if isinstance(result, ClientFailure):
            log(
                "warn",
                f"Jira create request failed for project {args.project}",
                metadata,
                reason=result.reason,
                duration_ms=elapsed_ms(started),
            )
            return result.response

        created = parse_response(JiraCreatedIssue, result.data, metadata)
        browse_url = context.config.jira.url_for(f"/browse/{created.key}")

        log("info", f"Created issue {created.key}", metadata, duration_ms=elapsed_ms(started))
        return text_result(formatters.format_created_issue(created, browse_url))

    except Exception as e:
        # Unknown project, issue type or field values come back as 400
        if isinstance(e, ExternalServiceError) and e.status_code == 400:
            log(
                "warn",
                "Invalid fields in create request",
                metadata,
                duration_ms=elapsed_ms(started),
                **describe_error(e),
            )
            return error_result(
                "Failed to create issue. Check the project key, issue type and field values, then try again."
            )

        log(
            "error",
            "Failed to create Jira issue",
            metadata,
            duration_ms=elapsed_ms(started),
            **describe_error(e),
        )
        return error_result(
            "An error occurred while creating the Jira issue. Check server logs for details."
        )


async def handle_update_issue(args: UpdateIssueArguments, context: ToolContext) -> CallToolResult:
    """Update fields on an existing issue.

    Jira replies 204 with no body on success, so there is no response to validate.
    """
    issue_key = args.issue_key
    metadata = CallMetadata.new(UPDATE_ISSUE, "update_issue")
    started = time.perf_counter()

    log("info", f"Updating Jira issue {issue_key}", metadata, fields=list(args.fields))

    try:
        fields = dict(args.fields)
        if isinstance(fields.get("description"), str):
            fields["description"] = formatters.text_to_adf(fields["description"])

        result = await jira_request(
            context,
            _issue_path(issue_key),
            method="PUT",
            body={"fields": fields},
            metadata=metadata,
            not_found_message=f"Issue {issue_key} was not found. Check the issue key and try again.",
        )

        if isinstance(result, ClientFailure):
            log(
                "warn",
                f"Jira update request failed for {issue_key}",
                metadata,
                reason=result.reason,
                duration_ms=elapsed_ms(started),
            )
            return result.response

        log("info", f"Updated issue {issue_key}", metadata, duration_ms=elapsed_ms(started))
        return text_result(formatters.format_updated_issue(issue_key, list(fields)))

    except Exception as e:
        if isinstance(e, ExternalServiceError) and e.status_code == 400:
            log(
                "warn",
                "Invalid field names or values in update request",
                metadata,
                duration_ms=elapsed_ms(started),
                **describe_error(e),
            )
            return error_result(
                "Failed to update issue. Check the field names and values are valid, then try again."
            )

        log(
            "error",
            "Failed to update Jira issue",
            metadata,
            duration_ms=elapsed_ms(started),
            **describe_error(e),
        )
        return error_result(
            "An error occurred while updating the Jira issue. Check server logs for details."
        )
