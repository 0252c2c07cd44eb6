"""Shared fixtures: configuration, fake upstreams, and log capture."""
import json
import logging
from typing import Any, AsyncIterator, Callable, Optional

import httpx
import pytest
import pytest_asyncio

from mcp_relay.config import ServerConfig, load_config
from mcp_relay.registry import ToolContext

TEST_ENV = {
    "JIRA_BASE_URL_MCP_RELAY": "https://acme.atlassian.net",
    "JIRA_USER_EMAIL_MCP_RELAY": "relay-bot@acme.example",
    "JIRA_API_TOKEN_MCP_RELAY": "super-secret-jira-token",
    "AWS_ACCESS_KEY_ID": "AKIATESTTESTTEST",
    "AWS_SECRET_ACCESS_KEY": "aws-secret-value",
    "AWS_REGION": "us-east-1",
    "S3_BUCKET_NAME": "brand-bucket",
    "MCP_RELAY_LOG_LEVEL": "INFO",
    "MCP_RELAY_HTTP_TIMEOUT_MS": "30000",
}


@pytest.fixture
def relay_env(monkeypatch):
    """Populate the environment with a complete, valid configuration."""
    for name, value in TEST_ENV.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


@pytest.fixture
def config(relay_env) -> ServerConfig:
    return load_config(env_file=None)


@pytest_asyncio.fixture
async def make_context(config) -> AsyncIterator[Callable[..., ToolContext]]:
    """Build a ToolContext whose HTTP client is served by a fake handler."""
    clients: list[httpx.AsyncClient] = []

    def _make(
        handler: Optional[Callable[[httpx.Request], Any]] = None,
        *,
        s3: Any = None,
        server_config: Optional[ServerConfig] = None,
    ) -> ToolContext:
        transport = httpx.MockTransport(handler or (lambda request: httpx.Response(500)))
        client = httpx.AsyncClient(transport=transport)
        clients.append(client)
        return ToolContext(
            server=None,
            config=server_config or config,
            http=client,
            s3=s3,
        )

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def log_entries(caplog) -> Callable[[], list[dict]]:
    """Return a callable yielding every structured log entry emitted so far."""
    caplog.set_level(logging.INFO, logger="mcp-relay")

    def _entries() -> list[dict]:
        return [json.loads(record.getMessage()) for record in caplog.records if record.name == "mcp-relay"]

    return _entries


@pytest.fixture
def issue_payload() -> dict:
    """A complete Jira v3 issue response."""
    return {
        "id": "10001",
        "key": "PROJ-123",
        "fields": {
            "summary": "Login page rejects valid passwords",
            "status": {"name": "In Progress"},
            "issuetype": {"name": "Bug"},
            "priority": {"name": "High"},
            "assignee": {"displayName": "Dana Reyes", "emailAddress": "dana@acme.example"},
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    {
                        "type": "paragraph",
                        "content": [{"type": "text", "text": "Steps to reproduce:"}],
                    },
                    {
                        "type": "orderedList",
                        "content": [
                            {
                                "type": "listItem",
                                "content": [
                                    {"type": "paragraph", "content": [{"type": "text", "text": "Open login"}]}
                                ],
                            },
                            {
                                "type": "listItem",
                                "content": [
                                    {"type": "paragraph", "content": [{"type": "text", "text": "Submit form"}]}
                                ],
                            },
                        ],
                    },
                ],
            },
            "created": "2024-03-01T09:15:00.000+0000",
            "updated": "2024-03-04T16:42:10.000+0000",
        },
    }
