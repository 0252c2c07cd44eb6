"""Brand guidelines integration: per-project configuration stored in S3."""
from .tools import get_tools

__all__ = ["get_tools"]
