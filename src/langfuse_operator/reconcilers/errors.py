"""Errors raised by the resource reconcilers."""

from __future__ import annotations


class ReconcileError(Exception):
    """Base class for reconciler errors."""


class MissingFieldError(ReconcileError):
    """A field required by the phase is absent from configuration or state."""

    def __init__(self, kind: str, field: str) -> None:
        self.kind = kind
        self.field = field
        super().__init__(f"{kind}: {field} is required")


class ImmutableResourceError(ReconcileError):
    """Update was requested for a kind that can only be replaced."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"{kind} cannot be updated in place; it must be replaced")
