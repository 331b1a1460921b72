"""Utilities for managing Kubernetes conditions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ..constants import (
    COND_CREATION_FAILED,
    COND_DEPENDENCY_NOT_READY,
    COND_DRIFT_DETECTED,
    COND_READY,
    COND_UPDATE_FAILED,
)


def update_condition(
    conditions: list[dict[str, Any]],
    condition_type: str,
    status: str,
    reason: str,
    message: str,
    observed_generation: int | None = None,
) -> list[dict[str, Any]]:
    """Update or add a condition to the conditions list.

    Args:
        conditions: List of existing conditions
        condition_type: Type of condition
        status: Status of condition ("True", "False", "Unknown")
        reason: Reason for the condition
        message: Human-readable message
        observed_generation: Generation when condition was observed

    Returns:
        Updated list of conditions
    """
    now = datetime.now(timezone.utc).isoformat()
    conditions = list(conditions)

    existing_idx = None
    for idx, cond in enumerate(conditions):
        if cond.get("type") == condition_type:
            existing_idx = idx
            break

    new_condition = {
        "type": condition_type,
        "status": status,
        "reason": reason,
        "message": message,
        "lastTransitionTime": now,
    }

    if observed_generation is not None:
        new_condition["observedGeneration"] = observed_generation

    if existing_idx is not None:
        existing = conditions[existing_idx]
        # Only update lastTransitionTime if status changed
        if existing.get("status") == status:
            new_condition["lastTransitionTime"] = existing.get("lastTransitionTime", now)
        conditions[existing_idx] = new_condition
    else:
        conditions.append(new_condition)

    return conditions


def is_ready(obj: dict[str, Any]) -> bool:
    """Check whether a custom resource reports Ready=True."""
    conditions = obj.get("status", {}).get("conditions", [])
    return any(cond.get("type") == COND_READY and cond.get("status") == "True" for cond in conditions)


def set_ready_condition(
    conditions: list[dict[str, Any]],
    status: bool,
    message: str,
    observed_generation: int | None = None,
) -> list[dict[str, Any]]:
    """Set the Ready condition."""
    return update_condition(
        conditions,
        COND_READY,
        "True" if status else "False",
        "Ready" if status else "NotReady",
        message,
        observed_generation,
    )


def set_dependency_not_ready_condition(
    conditions: list[dict[str, Any]],
    message: str,
) -> list[dict[str, Any]]:
    """Set DependencyNotReady and clear Ready."""
    conditions = update_condition(conditions, COND_DEPENDENCY_NOT_READY, "True", "DependencyNotReady", message)
    return set_ready_condition(conditions, False, message)


def set_creation_failed_condition(
    conditions: list[dict[str, Any]],
    message: str,
) -> list[dict[str, Any]]:
    """Set CreationFailed and clear Ready."""
    conditions = update_condition(conditions, COND_CREATION_FAILED, "True", "CreationFailed", message)
    return set_ready_condition(conditions, False, message)


def set_update_failed_condition(
    conditions: list[dict[str, Any]],
    message: str,
) -> list[dict[str, Any]]:
    """Set UpdateFailed and clear Ready."""
    conditions = update_condition(conditions, COND_UPDATE_FAILED, "True", "UpdateFailed", message)
    return set_ready_condition(conditions, False, message)


def set_drift_detected_condition(
    conditions: list[dict[str, Any]],
    detected: bool,
    message: str,
) -> list[dict[str, Any]]:
    """Record whether the last read found the entity missing remotely."""
    return update_condition(
        conditions,
        COND_DRIFT_DETECTED,
        "True" if detected else "False",
        "DeletedOutOfBand" if detected else "InSync",
        message,
    )


def clear_failure_conditions(conditions: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Drop failure conditions left over from earlier attempts."""
    failure_types = {COND_CREATION_FAILED, COND_UPDATE_FAILED, COND_DEPENDENCY_NOT_READY}
    return [cond for cond in conditions if cond.get("type") not in failure_types]
