"""Pydantic schemas for Jira tool arguments and Jira REST API v3 responses."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

# Jira normalises keys to uppercase, so either case is accepted
ISSUE_KEY_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*-\d+$"
PROJECT_KEY_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*$"


# Tool argument schemas

class _Arguments(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class GetIssueArguments(_Arguments):
    issue_key: str = Field(
        alias="issueKey",
        pattern=ISSUE_KEY_PATTERN,
        description='The Jira issue key (e.g. "PROJ-123")',
    )


class SearchIssuesArguments(_Arguments):
    jql: str = Field(
        min_length=1,
        description='A JQL query string (e.g. "project = PROJ AND status = Open")',
    )
    max_results: int = Field(
        default=50,
        ge=1,
        le=100,
        alias="maxResults",
        description="Maximum number of results to return (1-100, default 50)",
    )


class CreateIssueArguments(_Arguments):
    project: str = Field(
        pattern=PROJECT_KEY_PATTERN,
        description='The Jira project key (e.g. "PROJ")',
    )
    summary: str = Field(min_length=1, max_length=255, description="A brief summary of the issue")
    issue_type: str = Field(
        min_length=1,
        alias="issueType",
        description='The issue type name (e.g. "Task", "Bug", "Story")',
    )
    description: Optional[str] = Field(
        default=None,
        description="Detailed description of the issue (plain text)",
    )


class UpdateIssueArguments(_Arguments):
    issue_key: str = Field(
        alias="issueKey",
        pattern=ISSUE_KEY_PATTERN,
        description='The Jira issue key to update (e.g. "PROJ-123")',
    )
    fields: dict[str, Any] = Field(
        min_length=1,
        description=(
            'A map of Jira field names to new values. Common fields: "summary" (string), '
            '"description" (string, converted to rich text automatically), '
            '"priority" (e.g. {"name": "High"}), "assignee" (e.g. {"accountId": "abc123"}).'
        ),
    )


# Jira response schemas

class _JiraModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class NamedValue(_JiraModel):
    """Status, priority and issue type all share this shape."""

    name: str


class JiraUser(_JiraModel):
    display_name: str = Field(alias="displayName")
    email_address: Optional[str] = Field(None, alias="emailAddress")


class JiraIssueFields(_JiraModel):
    summary: str
    status: NamedValue
    issuetype: NamedValue
    priority: Optional[NamedValue] = None
    assignee: Optional[JiraUser] = None
    description: Optional[Any] = None  # Atlassian Document Format tree
    created: str
    updated: str


class JiraIssue(_JiraModel):
    key: str
    fields: JiraIssueFields


class JiraSearchResponse(_JiraModel):
    issues: list[JiraIssue]
    total: Optional[int] = None
    is_last: Optional[bool] = Field(None, alias="isLast")
    next_page_token: Optional[str] = Field(None, alias="nextPageToken")


class JiraCreatedIssue(_JiraModel):
    id: str
    key: str
    self_url: HttpUrl = Field(alias="self")
