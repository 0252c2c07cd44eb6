"""Thin httpx wrapper that bounds every outbound call with a timeout."""
import asyncio
from dataclasses import dataclass
from typing import Optional

import httpx

from .errors import CallMetadata, ExternalServiceError

DEFAULT_TIMEOUT_MS = 30_000


@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: str


def safe_url(url: str) -> str:
    """Reduce a URL to origin and path.

    Query strings, fragments and userinfo can carry credentials, so they are
    never included in error messages or logs.
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return "<invalid url>"
    host = f"[{parsed.host}]" if ":" in parsed.host else parsed.host
    port = f":{parsed.port}" if parsed.port else ""
    return f"{parsed.scheme}://{host}{port}{parsed.path}"


async def http_request(
    client: httpx.AsyncClient,
    url: str,
    *,
    method: str = "GET",
    headers: Optional[dict[str, str]] = None,
    body: Optional[str] = None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    metadata: CallMetadata,
) -> HttpResponse:
    """Send a request and return its status and raw body.

    The request runs inside ``asyncio.wait_for`` so that on expiry the
    in-flight request is cancelled rather than left running. Responses are
    returned whatever their status; classifying them is up to the caller.

    Raises:
        ExternalServiceError: on timeout or any transport failure
    """
    target = safe_url(url)

    try:
        response = await asyncio.wait_for(
            client.request(method, url, headers=headers, content=body),
            timeout=timeout_ms / 1000,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        raise ExternalServiceError(
            f"Request to {target} timed out after {timeout_ms}ms", metadata
        ) from e
    except httpx.HTTPError as e:
        detail = str(e).replace(url, target) or type(e).__name__
        raise ExternalServiceError(f"Request to {target} failed: {detail}", metadata) from e

    return HttpResponse(status=response.status_code, body=response.text)
