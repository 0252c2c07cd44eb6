"""MCP tool definitions for Jira."""
from mcp.types import ToolAnnotations

from ..registry import ToolDefinition
from . import handlers
from .schemas import (
    CreateIssueArguments,
    GetIssueArguments,
    SearchIssuesArguments,
    UpdateIssueArguments,
)


def get_tools() -> list[ToolDefinition]:
    """Get the list of Jira tools."""
    return [
        ToolDefinition(
            name=handlers.GET_ISSUE,
            description="Fetch a Jira issue by its key, returning summary, status, assignee, "
                        "priority, type, description, and timestamps. "
                        "Errors: not found, permission denied.",
            input_model=GetIssueArguments,
            annotations=ToolAnnotations(
                readOnlyHint=True,
                destructiveHint=False,
                openWorldHint=True,
                idempotentHint=True,
            ),
            handler=handlers.handle_get_issue,
        ),
        ToolDefinition(
            name=handlers.SEARCH_ISSUES,
            description="Search for Jira issues using a JQL query string. "
                        "Returns one summary line per issue. "
                        "Common pattern: jira_search_issues(jql=...) → jira_get_issue(issueKey=...) for details.",
            input_model=SearchIssuesArguments,
            annotations=ToolAnnotations(
                readOnlyHint=True,
                destructiveHint=False,
                openWorldHint=True,
                idempotentHint=True,
            ),
            handler=handlers.handle_search_issues,
        ),
        ToolDefinition(
            name=handlers.CREATE_ISSUE,
            description="Create a new Jira issue in the specified project.",
            input_model=CreateIssueArguments,
            annotations=ToolAnnotations(
                readOnlyHint=False,
                destructiveHint=False,
                openWorldHint=True,
                idempotentHint=False,
            ),
            handler=handlers.handle_create_issue,
        ),
        ToolDefinition(
            name=handlers.UPDATE_ISSUE,
            description="Update fields on an existing Jira issue. "
                        "Only the fields provided are changed.",
            input_model=UpdateIssueArguments,
            annotations=ToolAnnotations(
                readOnlyHint=False,
                destructiveHint=False,
                openWorldHint=True,
                idempotentHint=True,
            ),
            handler=handlers.handle_update_issue,
        ),
    ]
