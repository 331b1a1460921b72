"""Utility functions for the Langfuse Operator."""

from .conditions import (
    is_ready,
    set_creation_failed_condition,
    set_dependency_not_ready_condition,
    set_ready_condition,
    update_condition,
)
from .context import get_context_dict, get_correlation_id, with_correlation_id
from .errors import sanitize_dict, sanitize_exception
from .events import emit_event
from .secrets import credentials_secret_name, read_credentials, write_credentials_secret

__all__ = [
    "update_condition",
    "is_ready",
    "set_ready_condition",
    "set_creation_failed_condition",
    "set_dependency_not_ready_condition",
    "emit_event",
    "sanitize_exception",
    "sanitize_dict",
    "credentials_secret_name",
    "read_credentials",
    "write_credentials_secret",
    "get_correlation_id",
    "with_correlation_id",
    "get_context_dict",
]
