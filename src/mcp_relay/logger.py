"""Structured JSON logging.

Every entry is written as a single JSON line through the ``mcp-relay`` logger.
Output must go to stderr: in stdio mode stdout carries the MCP protocol
framing, and any stray write there corrupts the session.
"""
import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from .errors import CallMetadata

LogLevel = Literal["info", "warn", "error"]

logger = logging.getLogger("mcp-relay")

REDACTED = "[REDACTED]"

# Matched case-insensitively against keys at any nesting depth
SENSITIVE_KEYS = frozenset({
    "apitoken",
    "api_token",
    "apikey",
    "api_key",
    "accesskeyid",
    "access_key_id",
    "secretaccesskey",
    "secret_access_key",
    "password",
    "secret",
    "token",
    "authorization",
    "cookie",
})

QUIET_LOGGERS = ("httpx", "httpcore")

_LEVELS = {
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to stderr, one JSON document per line."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )
    # httpx logs full request URLs, query strings included, as plain text
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def sanitise(value: Any) -> Any:
    """Return a copy of value with sensitive keys redacted at any depth."""
    if isinstance(value, dict):
        return {
            key: REDACTED if str(key).lower() in SENSITIVE_KEYS else sanitise(val)
            for key, val in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [sanitise(item) for item in value]
    return value


def elapsed_ms(started: float) -> int:
    """Milliseconds since a time.perf_counter() reading."""
    return int((time.perf_counter() - started) * 1000)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log(
    level: LogLevel,
    message: str,
    metadata: Optional[CallMetadata] = None,
    **extra: Any,
) -> None:
    """Emit one structured, redacted log line."""
    entry: dict[str, Any] = {
        "timestamp": _timestamp(),
        "level": level,
        "message": message,
    }
    if metadata is not None:
        entry.update(metadata.as_dict())
    entry.update(extra)

    logger.log(_LEVELS[level], json.dumps(sanitise(entry), default=str))
