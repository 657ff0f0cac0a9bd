"""HTTP access to the GitHub REST API.

`build_client` creates the transport collaborator from configuration and
`invoke` performs exactly one request against it, classifying the outcome into
the error taxonomy of `core.errors`.
"""
from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from core.config import get_config, get_token
from core.errors import APIStatusError, SerializationError, TransportError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def build_client(config: dict[str, Any] | None = None, token: str | None = None) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` pointed at the configured GitHub API."""
    cfg = config or get_config()
    token = get_token() if token is None else token
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": str(cfg["api_version"]),
        "User-Agent": "github-projects-mcp",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=str(cfg["github_api_url"]).rstrip("/") + "/",
        headers=headers,
        timeout=httpx.Timeout(float(cfg["request_timeout"])),
    )


def _encode_body(body: Any) -> bytes | None:
    if body is None:
        return None
    try:
        return json.dumps(body).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to encode request body: {e}") from e


async def invoke(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    *,
    expected_status: int,
    failure: str,
    body: Any = None,
) -> Any:
    """Send one request and return the decoded JSON payload.

    Returns None when the matching response carries no body (e.g. 204).
    Raises TransportError when the API cannot be reached, APIStatusError when
    the status differs from `expected_status` and SerializationError when the
    body cannot be encoded or a successful response cannot be decoded.
    """
    content = _encode_body(body)
    headers = {"Content-Type": JSON_CONTENT_TYPE} if content is not None else None
    logger.debug(f"{method} {path}")

    # asyncio.CancelledError is not caught here: task cancellation reaches the caller unchanged
    try:
        async with client.stream(method, path, content=content, headers=headers) as response:
            raw = await response.aread()
            status = response.status_code
    except httpx.TimeoutException as e:
        logger.warning(f"{method} {path} timed out: {e}")
        raise TransportError(failure, f"request timed out: {e}") from e
    except httpx.RequestError as e:
        logger.warning(f"{method} {path} failed before a response was received: {e}")
        raise TransportError(failure, e) from e

    if status != expected_status:
        text = raw.decode("utf-8", errors="replace")
        logger.warning(f"{method} {path} returned {status}, expected {expected_status}")
        raise APIStatusError(failure, status, text)

    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise SerializationError(f"failed to decode response from {path}: {e}") from e
