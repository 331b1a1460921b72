"""Errors raised by the Langfuse API clients."""

from __future__ import annotations


class LangfuseError(Exception):
    """Base class for all Langfuse client errors."""


class SerializationError(LangfuseError):
    """Request body could not be encoded as JSON."""


class TransportError(LangfuseError):
    """Request never produced a response (connection failure, timeout)."""


class HTTPError(LangfuseError):
    """Response carried a status code outside the 2xx range."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"request failed with status code {status_code}, response body: {body}")


class DecodeError(LangfuseError):
    """Response body was not valid JSON."""


class NotFoundError(LangfuseError):
    """Entity is absent from the remote API."""

    def __init__(self, entity_id: str, scope: str | None = None) -> None:
        self.entity_id = entity_id
        self.scope = scope
        if scope:
            message = f"cannot find entity with ID {entity_id} in {scope}"
        else:
            message = f"cannot find entity with ID {entity_id}"
        super().__init__(message)


class DeleteFailedError(LangfuseError):
    """Delete call returned 2xx but reported success=false."""

    def __init__(self, entity_id: str, message: str | None = None) -> None:
        self.entity_id = entity_id
        self.message = message
        text = f"failed to delete entity with ID {entity_id}"
        if message:
            text = f"{text}: {message}"
        super().__init__(text)
