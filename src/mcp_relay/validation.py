"""Validate untrusted data against pydantic models."""
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import CallMetadata, SchemaValidationError

T = TypeVar("T")


def format_issues(error: ValidationError) -> list[str]:
    """Turn a pydantic ValidationError into "path: reason" strings, one per failure."""
    issues = []
    for item in error.errors(include_url=False):
        path = ".".join(str(part) for part in item["loc"]) or "<root>"
        issues.append(f"{path}: {item['msg']}")
    return issues


def _validate(model: type[T], data: Any, metadata: CallMetadata, message: str) -> T:
    try:
        return TypeAdapter(model).validate_python(data)
    except ValidationError as e:
        raise SchemaValidationError(message, metadata, format_issues(e)) from e


def parse_response(model: type[T], data: Any, metadata: CallMetadata) -> T:
    """Validate an upstream response payload.

    Raises:
        SchemaValidationError: listing every failing field, not just the first
    """
    return _validate(model, data, metadata, "API response did not match expected schema")


def parse_arguments(model: type[T], arguments: Any, metadata: CallMetadata) -> T:
    """Validate inbound tool arguments.

    Raises:
        SchemaValidationError: listing every failing argument
    """
    return _validate(model, arguments if arguments is not None else {}, metadata, "Invalid arguments")
