"""Handler for Project CRD."""

from __future__ import annotations

from typing import Any

import kopf

from ..config import DRIFT_CHECK_INTERVAL_SECONDS
from ..constants import API_GROUP_VERSION, KIND_PROJECT
from ..reconcilers.project import ProjectReconciler
from ..tracing import trace_span
from .base import BaseHandler
from .organization import parse_metadata
from .shared import resolve_organization_credentials


def parse_retention_days(spec: dict[str, Any]) -> int:
    """Read spec.retentionDays; 0 keeps data forever.

    Raises:
        ValueError: If the value is not a non-negative integer
    """
    value = spec.get("retentionDays", 0)
    try:
        retention_days = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"retentionDays must be an integer, got {value!r}") from e
    if retention_days < 0:
        raise ValueError("retentionDays must not be negative")
    return retention_days


class ProjectHandler(BaseHandler):
    """Handler for Project resources."""

    reconciler_class = ProjectReconciler

    def __init__(self):
        """Initialize project handler."""
        super().__init__(KIND_PROJECT)

    def build_config(self, spec: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        if not spec.get("name"):
            raise ValueError("name is required")
        config = {
            "name": spec["name"],
            "retention_days": parse_retention_days(spec),
            "metadata": parse_metadata(spec),
        }
        config.update(resolve_organization_credentials(spec, meta.get("namespace", "default")))
        return config

    def build_delete_config(self, spec: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        return resolve_organization_credentials(spec, meta.get("namespace", "default"))

    def load_state(
        self,
        config: dict[str, Any],
        status: dict[str, Any],
        meta: dict[str, Any],
    ) -> dict[str, Any] | None:
        project_id = status.get("projectId")
        if not project_id:
            return None
        return {
            "id": project_id,
            "name": status.get("name", ""),
            "retention_days": int(status.get("retentionDays") or 0),
            "metadata": dict(status.get("metadata") or {}),
            "organization_public_key": config.get("organization_public_key"),
            "organization_secret_key": config.get("organization_secret_key"),
        }

    def status_from_state(self, state: dict[str, Any] | None) -> dict[str, Any]:
        state = state or {}
        return {
            "projectId": state.get("id"),
            "name": state.get("name"),
            "retentionDays": state.get("retention_days"),
            "metadata": state.get("metadata"),
        }

    def needs_update(self, config: dict[str, Any], state: dict[str, Any]) -> bool:
        return (
            config["name"] != state.get("name")
            or config["retention_days"] != int(state.get("retention_days") or 0)
            or config["metadata"] != (state.get("metadata") or {})
        )

    def reconcile(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Reconcile Project resource."""
        name = meta.get("name", "unknown")
        with trace_span("reconcile_project", kind=KIND_PROJECT, attributes={"project.name": name}):
            super().reconcile(spec, meta, status, patch)


# Global handler instance
_handler = ProjectHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_PROJECT)
@kopf.on.update(API_GROUP_VERSION, KIND_PROJECT)
@kopf.on.resume(API_GROUP_VERSION, KIND_PROJECT)
@kopf.timer(API_GROUP_VERSION, KIND_PROJECT, interval=DRIFT_CHECK_INTERVAL_SECONDS)
def handle_project(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle Project resource reconciliation."""
    _handler.ensure_finalizer(meta, patch)
    _handler.reconcile_with_metrics(meta, lambda: _handler.reconcile(spec, meta, status, patch))


@kopf.on.delete(API_GROUP_VERSION, KIND_PROJECT)
def handle_project_delete(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle Project resource deletion."""
    _handler.delete(spec, meta, status, patch)
