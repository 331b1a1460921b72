"""HTTP transport primitives shared by the Langfuse API clients."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from ... import metrics
from .errors import DecodeError, HTTPError, SerializationError, TransportError

logger = logging.getLogger(__name__)


def build_url(host: str, api_path: str) -> str:
    """Join the configured host with a relative API path.

    Only the trailing slash on the host is tolerated; nothing else is
    normalized.
    """
    if not host:
        return api_path
    if host.endswith("/"):
        return host + api_path
    return host + "/" + api_path


def build_request(
    client: httpx.Client,
    method: str,
    url: str,
    body: Any = None,
) -> httpx.Request:
    """Build a JSON request.

    Raises:
        SerializationError: If body cannot be encoded as JSON
    """
    content = None
    if body is not None:
        try:
            content = json.dumps(body)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"failed to marshal request body: {e}") from e

    return client.build_request(
        method,
        url,
        content=content,
        headers={"Content-Type": "application/json"},
    )


def send(client: httpx.Client, request: httpx.Request, operation: str) -> httpx.Response:
    """Send a request and record API call metrics.

    Raises:
        TransportError: If no response was received
    """
    start_time = time.time()
    try:
        response = client.send(request)
    except httpx.HTTPError as e:
        metrics.api_call_total.labels(api_type="langfuse", operation=operation, result="error").inc()
        raise TransportError(f"failed to make request: {e}") from e
    finally:
        duration = time.time() - start_time
        metrics.api_call_duration_seconds.labels(api_type="langfuse", operation=operation).observe(duration)

    result = "success" if response.is_success else "error"
    metrics.api_call_total.labels(api_type="langfuse", operation=operation, result=result).inc()
    logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


def decode_response(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object response body.

    Raises:
        HTTPError: If the status code is outside [200, 300)
        DecodeError: If the body is not valid JSON or not a JSON object
    """
    if response.status_code < 200 or response.status_code >= 300:
        raise HTTPError(response.status_code, response.text)

    try:
        data = json.loads(response.content)
    except ValueError as e:
        raise DecodeError(f"failed to unmarshal response body: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"failed to unmarshal response body: expected a JSON object, got {type(data).__name__}")
    return data
