"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_CREATED,
    EVENT_REASON_DELETED,
    EVENT_REASON_DRIFT_DETECTED,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_REPLACED,
    EVENT_REASON_UPDATED,
    EVENT_REASON_VALIDATE_FAILED,
    EVENT_REASON_VALIDATE_SUCCEEDED,
)


def emit_event(
    meta: dict[str, Any],
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        meta: Resource metadata
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        meta,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(meta: dict[str, Any]) -> None:
    """Emit reconcile started event."""
    emit_event(meta, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(meta: dict[str, Any], message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(meta, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_validate_succeeded(meta: dict[str, Any]) -> None:
    """Emit validation succeeded event."""
    emit_event(meta, EVENT_REASON_VALIDATE_SUCCEEDED, "Validation succeeded")


def emit_validate_failed(meta: dict[str, Any], message: str) -> None:
    """Emit validation failed event."""
    emit_event(meta, EVENT_REASON_VALIDATE_FAILED, message, type_="Warning")


def emit_created(meta: dict[str, Any], kind: str, entity_id: str) -> None:
    """Emit entity created event."""
    emit_event(meta, EVENT_REASON_CREATED, f"{kind} {entity_id} created")


def emit_updated(meta: dict[str, Any], kind: str, entity_id: str) -> None:
    """Emit entity updated event."""
    emit_event(meta, EVENT_REASON_UPDATED, f"{kind} {entity_id} updated")


def emit_deleted(meta: dict[str, Any], kind: str, entity_id: str) -> None:
    """Emit entity deleted event."""
    emit_event(meta, EVENT_REASON_DELETED, f"{kind} {entity_id} deleted")


def emit_replaced(meta: dict[str, Any], kind: str, old_id: str, new_id: str) -> None:
    """Emit entity replaced event."""
    emit_event(meta, EVENT_REASON_REPLACED, f"{kind} {old_id} replaced by {new_id}")


def emit_drift_detected(meta: dict[str, Any], kind: str, entity_id: str) -> None:
    """Emit drift detected event."""
    emit_event(
        meta,
        EVENT_REASON_DRIFT_DETECTED,
        f"{kind} {entity_id} no longer exists remotely",
        type_="Warning",
    )
