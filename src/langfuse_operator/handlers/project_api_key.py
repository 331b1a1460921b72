"""Handler for ProjectApiKey CRD."""

from __future__ import annotations

from typing import Any

import kopf

from ..config import DRIFT_CHECK_INTERVAL_SECONDS
from ..constants import API_GROUP_VERSION, KIND_PROJECT_API_KEY
from ..reconcilers.project_api_key import ProjectApiKeyReconciler
from ..tracing import trace_span
from .base import BaseHandler
from .shared import (
    load_stored_key_pair,
    resolve_organization_credentials,
    resolve_project_id,
    store_key_pair,
)


class ProjectApiKeyHandler(BaseHandler):
    """Handler for ProjectApiKey resources."""

    reconciler_class = ProjectApiKeyReconciler

    def __init__(self):
        """Initialize project API key handler."""
        super().__init__(KIND_PROJECT_API_KEY)

    def build_config(self, spec: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        namespace = meta.get("namespace", "default")
        config = {"project_id": resolve_project_id(spec, namespace)}
        config.update(resolve_organization_credentials(spec, namespace))
        return config

    def build_delete_config(self, spec: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        return resolve_organization_credentials(spec, meta.get("namespace", "default"))

    def load_state(
        self,
        config: dict[str, Any],
        status: dict[str, Any],
        meta: dict[str, Any],
    ) -> dict[str, Any] | None:
        key_id = status.get("apiKeyId")
        if not key_id:
            return None
        return {
            "id": key_id,
            "project_id": status.get("projectId"),
            **load_stored_key_pair(meta.get("namespace", "default"), status.get("secretName")),
            "organization_public_key": config.get("organization_public_key"),
            "organization_secret_key": config.get("organization_secret_key"),
        }

    def status_from_state(self, state: dict[str, Any] | None) -> dict[str, Any]:
        state = state or {}
        return {
            "apiKeyId": state.get("id"),
            "projectId": state.get("project_id"),
        }

    def store_secrets(self, state: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        secret_name = store_key_pair(meta, state, KIND_PROJECT_API_KEY, "project-api-key")
        return {"secretName": secret_name}

    def requires_replacement(self, config: dict[str, Any], state: dict[str, Any]) -> bool:
        # A key whose pair was never stored cannot be used: replace it
        return config["project_id"] != state.get("project_id") or not state.get("secret_key")

    def reconcile(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Reconcile ProjectApiKey resource."""
        name = meta.get("name", "unknown")
        with trace_span(
            "reconcile_project_api_key",
            kind=KIND_PROJECT_API_KEY,
            attributes={"projectapikey.name": name},
        ):
            super().reconcile(spec, meta, status, patch)


# Global handler instance
_handler = ProjectApiKeyHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_PROJECT_API_KEY)
@kopf.on.update(API_GROUP_VERSION, KIND_PROJECT_API_KEY)
@kopf.on.resume(API_GROUP_VERSION, KIND_PROJECT_API_KEY)
@kopf.timer(API_GROUP_VERSION, KIND_PROJECT_API_KEY, interval=DRIFT_CHECK_INTERVAL_SECONDS)
def handle_project_api_key(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle ProjectApiKey resource reconciliation."""
    _handler.ensure_finalizer(meta, patch)
    _handler.reconcile_with_metrics(meta, lambda: _handler.reconcile(spec, meta, status, patch))


@kopf.on.delete(API_GROUP_VERSION, KIND_PROJECT_API_KEY)
def handle_project_api_key_delete(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle ProjectApiKey resource deletion."""
    _handler.delete(spec, meta, status, patch)
