"""Error taxonomy shared by every tool.

All errors carry CallMetadata so that a failure can always be traced back to
the tool invocation that produced it.
"""
import uuid
from dataclasses import dataclass, asdict
from typing import Any, Optional


@dataclass(frozen=True)
class CallMetadata:
    """Correlation data threaded through one tool invocation."""

    tool_name: str
    operation: str
    correlation_id: str

    @classmethod
    def new(cls, tool_name: str, operation: str) -> "CallMetadata":
        """Create metadata with a fresh correlation id."""
        return cls(tool_name=tool_name, operation=operation, correlation_id=str(uuid.uuid4()))

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


# Used for failures raised before any tool is invoked (config loading, registration)
def startup_metadata(operation: str, tool_name: str = "server") -> CallMetadata:
    return CallMetadata(tool_name=tool_name, operation=operation, correlation_id="startup")


class ToolError(Exception):
    """Base class for all relay failures."""

    def __init__(self, message: str, metadata: CallMetadata):
        super().__init__(message)
        self.message = message
        self.metadata = metadata


class ExternalServiceError(ToolError):
    """Raised when an upstream call fails or returns an unexpected response."""

    def __init__(self, message: str, metadata: CallMetadata, status_code: Optional[int] = None):
        super().__init__(message, metadata)
        self.status_code = status_code


class SchemaValidationError(ToolError):
    """Raised when data does not match its expected schema."""

    def __init__(self, message: str, metadata: CallMetadata, issues: list[str]):
        super().__init__(message, metadata)
        self.issues = issues


class ConfigurationError(ToolError):
    """Raised when the process environment is invalid at startup."""
    pass


def describe_error(exc: BaseException) -> dict[str, Any]:
    """Collect log fields describing an exception."""
    fields: dict[str, Any] = {
        "error": str(exc) or type(exc).__name__,
        "error_type": type(exc).__name__,
    }
    if isinstance(exc, ExternalServiceError) and exc.status_code is not None:
        fields["status_code"] = exc.status_code
    if isinstance(exc, SchemaValidationError):
        fields["issues"] = exc.issues
    return fields
