"""MCP Relay - Model Context Protocol server for shared team tooling.

This package exposes Jira and brand guideline tools to AI assistants over
MCP, using server-held credentials.

Modules:
- server: stdio MCP server implementation
- registry: tool definitions, shared context and dispatch
- config: environment configuration
- errors, logger, http_client, validation, results: shared infrastructure
- jira, brand: tool integrations (schemas, client, handlers, formatters)
"""

__version__ = "0.1.0"
