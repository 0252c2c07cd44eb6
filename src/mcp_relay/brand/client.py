"""S3 client for per-project brand guideline documents.

Mirrors the Jira client contract: expected failures (bad credentials, access
denied, missing object) come back as a ClientFailure; anything else raises
ExternalServiceError.
"""
import asyncio
import json
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import S3Settings
from ..errors import CallMetadata, ExternalServiceError
from ..registry import ToolContext
from ..results import ClientFailure, ClientResult, ClientSuccess, error_result

GUIDELINES_OBJECT = "brand-guidelines.json"

AUTH_FAILED_MESSAGE = "Object store authentication failed. Check the configured credentials."
PERMISSION_DENIED_MESSAGE = (
    "Permission denied when accessing the object store. The configured credentials may lack access."
)
NOT_FOUND_MESSAGE = "The requested object was not found."

_AUTH_ERROR_CODES = {"InvalidAccessKeyId", "SignatureDoesNotMatch", "ExpiredToken", "InvalidToken"}
_FORBIDDEN_ERROR_CODES = {"AccessDenied", "AllAccessDisabled", "403"}
_NOT_FOUND_ERROR_CODES = {"NoSuchKey", "NoSuchBucket", "404"}


def create_s3_client(settings: S3Settings, timeout_ms: int) -> Any:
    """Build an S3 client from server-held credentials."""
    timeout_s = timeout_ms / 1000
    return boto3.client(
        "s3",
        region_name=settings.region,
        aws_access_key_id=settings.access_key_id.get_secret_value(),
        aws_secret_access_key=settings.secret_access_key.get_secret_value(),
        config=Config(
            connect_timeout=timeout_s,
            read_timeout=timeout_s,
            retries={"total_max_attempts": 1, "mode": "standard"},
        ),
    )


def guidelines_key(project_id: str) -> str:
    """Deterministic object key for a project's brand guidelines."""
    return f"{project_id}/{GUIDELINES_OBJECT}"


async def fetch_json_object(
    context: ToolContext,
    key: str,
    *,
    metadata: CallMetadata,
    not_found_message: Optional[str] = None,
) -> ClientResult:
    """Read and parse a JSON object from the configured bucket.

    boto3 is synchronous, so the call runs in a worker thread; the await is
    bounded by the configured timeout. A timed-out read keeps its thread until
    botocore's own connect/read timeouts expire, which use the same value and
    never retry.

    Raises:
        ExternalServiceError: on timeouts, unexpected S3 errors or invalid JSON
    """
    bucket = context.config.s3.bucket_name
    timeout_ms = context.config.runtime.http_timeout_ms

    def _read() -> bytes:
        response = context.s3.get_object(Bucket=bucket, Key=key)
        return response["Body"].read()

    try:
        raw = await asyncio.wait_for(asyncio.to_thread(_read), timeout=timeout_ms / 1000)
    except asyncio.TimeoutError as e:
        raise ExternalServiceError(
            f"Request to s3://{bucket}/{key} timed out after {timeout_ms}ms", metadata
        ) from e
    except ClientError as e:
        code = str(e.response.get("Error", {}).get("Code", ""))
        status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

        if code in _AUTH_ERROR_CODES:
            return ClientFailure(error_result(AUTH_FAILED_MESSAGE), "authentication_failed")
        if code in _FORBIDDEN_ERROR_CODES or status == 403:
            return ClientFailure(error_result(PERMISSION_DENIED_MESSAGE), "permission_denied")
        if code in _NOT_FOUND_ERROR_CODES or status == 404:
            return ClientFailure(error_result(not_found_message or NOT_FOUND_MESSAGE), "not_found")

        raise ExternalServiceError(
            f"S3 GetObject on s3://{bucket}/{key} failed with {code or 'unknown error'}",
            metadata,
            status_code=status,
        ) from e
    except BotoCoreError as e:
        raise ExternalServiceError(
            f"Request to s3://{bucket}/{key} failed: {type(e).__name__}", metadata
        ) from e

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ExternalServiceError(f"Failed to parse s3://{bucket}/{key} as JSON", metadata) from e

    return ClientSuccess(data)
