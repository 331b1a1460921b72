"""Langfuse management API clients."""

from .admin import AdminClient
from .base import AdminAPI, OrganizationAPI
from .errors import (
    DecodeError,
    DeleteFailedError,
    HTTPError,
    LangfuseError,
    NotFoundError,
    SerializationError,
    TransportError,
)
from .organization import OrganizationClient

__all__ = [
    "AdminClient",
    "AdminAPI",
    "OrganizationAPI",
    "OrganizationClient",
    "LangfuseError",
    "SerializationError",
    "TransportError",
    "HTTPError",
    "DecodeError",
    "NotFoundError",
    "DeleteFailedError",
]
