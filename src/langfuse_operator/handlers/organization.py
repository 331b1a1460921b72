"""Handler for Organization CRD."""

from __future__ import annotations

from typing import Any

import kopf

from ..config import DRIFT_CHECK_INTERVAL_SECONDS
from ..constants import API_GROUP_VERSION, KIND_ORGANIZATION
from ..reconcilers.organization import OrganizationReconciler
from ..tracing import trace_span
from .base import BaseHandler


def parse_metadata(spec: dict[str, Any]) -> dict[str, str]:
    """Read spec.metadata as a string-keyed string map.

    Raises:
        ValueError: If metadata is not a mapping
    """
    metadata = spec.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise ValueError("metadata must be a map of strings")
    return {str(key): str(value) for key, value in metadata.items()}


class OrganizationHandler(BaseHandler):
    """Handler for Organization resources."""

    reconciler_class = OrganizationReconciler

    def __init__(self):
        """Initialize organization handler."""
        super().__init__(KIND_ORGANIZATION)

    def build_config(self, spec: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        if not spec.get("name"):
            raise ValueError("name is required")
        return {"name": spec["name"], "metadata": parse_metadata(spec)}

    def load_state(
        self,
        config: dict[str, Any],
        status: dict[str, Any],
        meta: dict[str, Any],
    ) -> dict[str, Any] | None:
        org_id = status.get("organizationId")
        if not org_id:
            return None
        return {
            "id": org_id,
            "name": status.get("name", ""),
            "metadata": dict(status.get("metadata") or {}),
        }

    def status_from_state(self, state: dict[str, Any] | None) -> dict[str, Any]:
        state = state or {}
        return {
            "organizationId": state.get("id"),
            "name": state.get("name"),
            "metadata": state.get("metadata"),
        }

    def needs_update(self, config: dict[str, Any], state: dict[str, Any]) -> bool:
        return config["name"] != state.get("name") or config["metadata"] != (state.get("metadata") or {})

    def reconcile(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Reconcile Organization resource."""
        name = meta.get("name", "unknown")
        with trace_span("reconcile_organization", kind=KIND_ORGANIZATION, attributes={"organization.name": name}):
            super().reconcile(spec, meta, status, patch)


# Global handler instance
_handler = OrganizationHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_ORGANIZATION)
@kopf.on.update(API_GROUP_VERSION, KIND_ORGANIZATION)
@kopf.on.resume(API_GROUP_VERSION, KIND_ORGANIZATION)
@kopf.timer(API_GROUP_VERSION, KIND_ORGANIZATION, interval=DRIFT_CHECK_INTERVAL_SECONDS)
def handle_organization(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle Organization resource reconciliation."""
    _handler.ensure_finalizer(meta, patch)
    _handler.reconcile_with_metrics(meta, lambda: _handler.reconcile(spec, meta, status, patch))


@kopf.on.delete(API_GROUP_VERSION, KIND_ORGANIZATION)
def handle_organization_delete(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle Organization resource deletion."""
    _handler.delete(spec, meta, status, patch)
