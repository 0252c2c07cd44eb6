"""Tests for Jira response formatting and ADF conversion."""
import pytest

from mcp_relay.jira.formatters import (
    NO_RESULTS,
    extract_text_from_adf,
    format_issue,
    format_issue_summary,
    format_search_results,
    format_updated_issue,
    text_to_adf,
)
from mcp_relay.jira.schemas import JiraIssue, JiraSearchResponse


def _text(value):
    return {"type": "text", "text": value}


def _paragraph(*children):
    return {"type": "paragraph", "content": list(children)}


def _item(text):
    return {"type": "listItem", "content": [_paragraph(_text(text))]}


class TestExtractTextFromAdf:
    """Reducing ADF trees to plain text."""

    def test_paragraphs_joined_by_blank_line(self):
        doc = {"type": "doc", "content": [_paragraph(_text("One")), _paragraph(_text("Two"))]}
        assert extract_text_from_adf(doc) == "One\n\nTwo"

    def test_inline_text_concatenated(self):
        assert extract_text_from_adf(_paragraph(_text("Hello, "), _text("world"))) == "Hello, world"

    def test_hard_break(self):
        para = _paragraph(_text("line 1"), {"type": "hardBreak"}, _text("line 2"))
        assert extract_text_from_adf(para) == "line 1\nline 2"

    def test_bullet_list(self):
        node = {"type": "bulletList", "content": [_item("a"), _item("b")]}
        assert extract_text_from_adf(node) == "- a\n- b"

    def test_ordered_list_numbers_from_one(self):
        node = {"type": "orderedList", "content": [_item("first"), _item("second"), _item("third")]}
        assert extract_text_from_adf(node) == "1. first\n2. second\n3. third"

    def test_blockquote_prefixes_each_line(self):
        node = {
            "type": "blockquote",
            "content": [_paragraph(_text("quoted"), {"type": "hardBreak"}, _text("twice"))],
        }
        assert extract_text_from_adf(node) == "> quoted\n> twice"

    def test_heading_and_code_block(self):
        doc = {
            "type": "doc",
            "content": [
                {"type": "heading", "attrs": {"level": 2}, "content": [_text("Title")]},
                {"type": "codeBlock", "content": [_text("print('hi')")]},
            ],
        }
        assert extract_text_from_adf(doc) == "Title\n\nprint('hi')"

    def test_inline_attribute_nodes(self):
        para = _paragraph(
            {"type": "mention", "attrs": {"id": "abc", "text": "@Dana"}},
            _text(" see "),
            {"type": "inlineCard", "attrs": {"url": "https://example.com/doc"}},
            _text(" "),
            {"type": "emoji", "attrs": {"shortName": ":tada:"}},
        )
        assert extract_text_from_adf(para) == "@Dana see https://example.com/doc :tada:"

    def test_unknown_node_recurses_into_children(self):
        """Unrecognised node types keep their content."""
        node = {"type": "panel", "attrs": {"panelType": "info"}, "content": [_paragraph(_text("Heads up"))]}
        assert extract_text_from_adf(node) == "Heads up"

    @pytest.mark.parametrize("node", [
        None,
        "plain string",
        42,
        [],
        {},
        {"type": 7},
        {"type": "paragraph"},
        {"type": "paragraph", "content": "not a list"},
        {"type": "text"},
        {"type": "text", "text": None},
        {"type": "mention", "attrs": "bad"},
        {"type": "doc", "content": [None, 1, "x", {"type": "mystery", "content": []}]},
    ])
    def test_never_raises(self, node):
        assert isinstance(extract_text_from_adf(node), str)

    def test_deeply_nested_unknown_types(self):
        node = _text("leaf")
        for depth in range(50):
            node = {"type": f"future-node-{depth}", "content": [node]}
        assert extract_text_from_adf(node) == "leaf"


class TestTextToAdf:
    """Converting plain text to ADF."""

    def test_splits_on_blank_lines(self):
        doc = text_to_adf("First block\n\n\nSecond block\nsame paragraph")
        assert doc["type"] == "doc"
        assert doc["version"] == 1
        assert doc["content"] == [
            _paragraph(_text("First block")),
            _paragraph(_text("Second block\nsame paragraph")),
        ]

    def test_empty_text_gives_single_empty_paragraph(self):
        assert text_to_adf("  \n\n ")["content"] == [{"type": "paragraph", "content": []}]

    def test_reduces_back_to_input_text(self):
        text = "Alpha\n\nBeta"
        assert extract_text_from_adf(text_to_adf(text)) == text


class TestFormatIssue:
    """Formatting a single issue."""

    def test_contains_all_fields(self, issue_payload):
        text = format_issue(JiraIssue.model_validate(issue_payload))

        assert text.splitlines()[0] == "PROJ-123: Login page rejects valid passwords"
        assert "Type:     Bug" in text
        assert "Status:   In Progress" in text
        assert "Priority: High" in text
        assert "Assignee: Dana Reyes" in text
        assert "Created:  2024-03-01T09:15:00.000+0000" in text
        assert "Updated:  2024-03-04T16:42:10.000+0000" in text
        assert text.endswith("Description:\nSteps to reproduce:\n\n1. Open login\n2. Submit form")

    def test_essential_fields_recoverable(self, issue_payload):
        """Key, summary and status can be read back from the formatted text."""
        issue = JiraIssue.model_validate(issue_payload)
        lines = format_issue(issue).splitlines()

        key, summary = lines[0].split(": ", 1)
        status = next(line for line in lines if line.startswith("Status:"))[len("Status:"):].strip()

        assert key == issue.key
        assert summary == issue.fields.summary
        assert status == issue.fields.status.name

    def test_is_deterministic(self, issue_payload):
        issue = JiraIssue.model_validate(issue_payload)
        assert format_issue(issue) == format_issue(issue)

    def test_null_optional_fields_use_placeholders(self, issue_payload):
        fields = dict(issue_payload["fields"], priority=None, assignee=None, description=None)
        text = format_issue(JiraIssue.model_validate({"key": "PROJ-9", "fields": fields}))

        assert "Priority: None" in text
        assert "Assignee: Unassigned" in text
        assert text.endswith("Description:\nNo description provided.")
        assert "null" not in text

    def test_whitespace_only_description_uses_placeholder(self, issue_payload):
        fields = dict(issue_payload["fields"], description={"type": "doc", "content": [_paragraph(_text("   "))]})
        text = format_issue(JiraIssue.model_validate({"key": "PROJ-9", "fields": fields}))
        assert text.endswith("Description:\nNo description provided.")


class TestFormatSearchResults:
    """Formatting search result pages."""

    def _page(self, issue_payload, count, **extra):
        issues = [dict(issue_payload, key=f"PROJ-{n}") for n in range(1, count + 1)]
        return JiraSearchResponse.model_validate({"issues": issues, **extra})

    def test_no_results(self, issue_payload):
        assert format_search_results(self._page(issue_payload, 0, total=0, isLast=True)) == NO_RESULTS

    def test_found_header_when_last_page(self, issue_payload):
        text = format_search_results(self._page(issue_payload, 2, isLast=True))
        lines = text.splitlines()
        assert lines[0] == "Found 2 issue(s)."
        assert lines[1] == ""
        assert lines[2].startswith("PROJ-1  [Bug]  In Progress  P:High  @Dana Reyes")
        assert len(lines) == 4

    def test_more_available_with_total(self, issue_payload):
        text = format_search_results(self._page(issue_payload, 2, total=40, isLast=False))
        assert text.splitlines()[0] == "Showing 2 of 40 issue(s) (more results available)."

    def test_more_available_without_total(self, issue_payload):
        text = format_search_results(self._page(issue_payload, 1, isLast=False))
        assert text.splitlines()[0] == "Showing 1 issue(s) (more results available)."

    def test_absent_is_last_is_not_assumed_truncated(self, issue_payload):
        text = format_search_results(self._page(issue_payload, 3))
        assert text.splitlines()[0] == "Found 3 issue(s)."

    def test_next_page_token_signals_more(self, issue_payload):
        text = format_search_results(self._page(issue_payload, 1, nextPageToken="abc"))
        assert text.splitlines()[0] == "Showing 1 issue(s) (more results available)."

    def test_summary_line_placeholders(self, issue_payload):
        fields = dict(issue_payload["fields"], priority=None, assignee=None)
        issue = JiraIssue.model_validate({"key": "PROJ-5", "fields": fields})
        assert format_issue_summary(issue) == (
            "PROJ-5  [Bug]  In Progress  P:None  @Unassigned  - Login page rejects valid passwords"
        )


def test_format_updated_issue():
    assert format_updated_issue("PROJ-1", ["summary", "priority"]) == (
        "Updated PROJ-1\n\nFields changed: summary, priority"
    )
