"""Jira integration: issue lookup, JQL search, create and update."""
from .tools import get_tools

__all__ = ["get_tools"]
