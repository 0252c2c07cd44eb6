"""Formatting for Jira tool responses.

Includes conversion between plain text and Atlassian Document Format (ADF),
the rich-text tree Jira v3 uses for descriptions and comments.
"""
import re
from typing import Any, Optional

from .schemas import JiraCreatedIssue, JiraIssue, JiraSearchResponse

NO_PRIORITY = "None"
UNASSIGNED = "Unassigned"
NO_DESCRIPTION = "No description provided."
NO_RESULTS = "No issues found matching the query."


def text_to_adf(text: str) -> dict:
    """Wrap plain text in an ADF document, one paragraph per blank-line-separated block."""
    blocks = [block.strip() for block in re.split(r"\n{2,}", text)]
    paragraphs = [
        {"type": "paragraph", "content": [{"type": "text", "text": block}]}
        for block in blocks
        if block
    ]
    if not paragraphs:
        paragraphs = [{"type": "paragraph", "content": []}]

    return {"type": "doc", "version": 1, "content": paragraphs}


def _attr(node: dict, name: str) -> Optional[str]:
    attrs = node.get("attrs")
    if isinstance(attrs, dict) and isinstance(attrs.get(name), str):
        return attrs[name]
    return None


def extract_text_from_adf(node: Any) -> str:
    """Reduce an ADF node tree to plain text.

    Never raises. Node types without special handling fall back to the
    concatenated text of their children, so new node types introduced by
    Jira still render their content.
    """
    if not isinstance(node, dict):
        return ""

    node_type = node.get("type")
    if not isinstance(node_type, str):
        return ""

    # Leaf nodes
    if node_type == "text":
        text = node.get("text")
        return text if isinstance(text, str) else ""
    if node_type == "hardBreak":
        return "\n"
    if node_type == "mention":
        return _attr(node, "text") or ""
    if node_type == "inlineCard":
        return _attr(node, "url") or ""
    if node_type == "emoji":
        return _attr(node, "text") or _attr(node, "shortName") or ""

    content = node.get("content")
    if not isinstance(content, list):
        return ""

    children = [extract_text_from_adf(child) for child in content]

    if node_type == "doc":
        return "\n\n".join(children)
    if node_type == "bulletList":
        return "\n".join(children)
    if node_type == "orderedList":
        numbered = []
        for index, text in enumerate(children, start=1):
            # listItem renders with a "- " marker; swap it for the number
            if text.startswith("- "):
                text = text[2:]
            numbered.append(f"{index}. {text}")
        return "\n".join(numbered)
    if node_type == "listItem":
        return "- " + "\n".join(children)
    if node_type == "blockquote":
        quoted = "\n".join(children)
        return "\n".join(f"> {line}" for line in quoted.split("\n"))

    # paragraph, heading, codeBlock and anything unrecognised
    return "".join(children)


def _priority(issue: JiraIssue) -> str:
    priority = issue.fields.priority
    return priority.name if priority else NO_PRIORITY


def _assignee(issue: JiraIssue) -> str:
    assignee = issue.fields.assignee
    return assignee.display_name if assignee else UNASSIGNED


def format_issue(issue: JiraIssue) -> str:
    """Format a single issue for display."""
    fields = issue.fields
    description_text = extract_text_from_adf(fields.description) if fields.description else ""
    description = description_text.strip() or NO_DESCRIPTION

    lines = [
        f"{issue.key}: {fields.summary}",
        "",
        f"Type:     {fields.issuetype.name}",
        f"Status:   {fields.status.name}",
        f"Priority: {_priority(issue)}",
        f"Assignee: {_assignee(issue)}",
        "",
        f"Created:  {fields.created}",
        f"Updated:  {fields.updated}",
        "",
        "Description:",
        description,
    ]
    return "\n".join(lines)


def format_issue_summary(issue: JiraIssue) -> str:
    """Format an issue as a compact one-liner for list views."""
    fields = issue.fields
    return (
        f"{issue.key}  [{fields.issuetype.name}]  {fields.status.name}  "
        f"P:{_priority(issue)}  @{_assignee(issue)}  - {fields.summary}"
    )


def has_more_results(response: JiraSearchResponse) -> bool:
    """Whether the upstream reported further pages.

    isLast may be absent. Absent means unknown, not "last page"; it only
    counts as more-available when a nextPageToken is present.
    """
    if response.is_last is not None:
        return not response.is_last
    return response.next_page_token is not None


def format_search_results(response: JiraSearchResponse) -> str:
    """Format a page of search results with a count header."""
    issues = response.issues
    if not issues:
        return NO_RESULTS

    if has_more_results(response):
        total_info = f" of {response.total}" if response.total is not None else ""
        header = f"Showing {len(issues)}{total_info} issue(s) (more results available)."
    else:
        header = f"Found {len(issues)} issue(s)."

    return "\n".join([header, ""] + [format_issue_summary(issue) for issue in issues])


def format_created_issue(created: JiraCreatedIssue, browse_url: str) -> str:
    return f"Created {created.key}\nID: {created.id}\nURL: {browse_url}"


def format_updated_issue(issue_key: str, field_names: list[str]) -> str:
    return f"Updated {issue_key}\n\nFields changed: {', '.join(field_names)}"
