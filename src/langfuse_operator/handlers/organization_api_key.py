"""Handler for OrganizationApiKey CRD."""

from __future__ import annotations

from typing import Any

import kopf

from ..config import DRIFT_CHECK_INTERVAL_SECONDS
from ..constants import API_GROUP_VERSION, KIND_ORGANIZATION_API_KEY
from ..reconcilers.organization_api_key import OrganizationApiKeyReconciler
from ..tracing import trace_span
from .base import BaseHandler
from .shared import load_stored_key_pair, resolve_organization_id, store_key_pair


class OrganizationApiKeyHandler(BaseHandler):
    """Handler for OrganizationApiKey resources.

    The key pair lives in the "<name>-credentials" secret; status only
    carries identifiers. Pointing the key at another organization replaces it.
    """

    reconciler_class = OrganizationApiKeyReconciler

    def __init__(self):
        """Initialize organization API key handler."""
        super().__init__(KIND_ORGANIZATION_API_KEY)

    def build_config(self, spec: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        namespace = meta.get("namespace", "default")
        return {"organization_id": resolve_organization_id(spec, namespace)}

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
            "organization_id": status.get("organizationId"),
            **load_stored_key_pair(meta.get("namespace", "default"), status.get("secretName")),
        }

    def status_from_state(self, state: dict[str, Any] | None) -> dict[str, Any]:
        state = state or {}
        return {
            "apiKeyId": state.get("id"),
            "organizationId": state.get("organization_id"),
        }

    def store_secrets(self, state: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        secret_name = store_key_pair(meta, state, KIND_ORGANIZATION_API_KEY, "organization-api-key")
        return {"secretName": secret_name}

    def requires_replacement(self, config: dict[str, Any], state: dict[str, Any]) -> bool:
        # A key whose pair was never stored cannot be used: replace it
        return config["organization_id"] != state.get("organization_id") or not state.get("secret_key")

    def reconcile(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Reconcile OrganizationApiKey resource."""
        name = meta.get("name", "unknown")
        with trace_span(
            "reconcile_organization_api_key",
            kind=KIND_ORGANIZATION_API_KEY,
            attributes={"organizationapikey.name": name},
        ):
            super().reconcile(spec, meta, status, patch)


# Global handler instance
_handler = OrganizationApiKeyHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_ORGANIZATION_API_KEY)
@kopf.on.update(API_GROUP_VERSION, KIND_ORGANIZATION_API_KEY)
@kopf.on.resume(API_GROUP_VERSION, KIND_ORGANIZATION_API_KEY)
@kopf.timer(API_GROUP_VERSION, KIND_ORGANIZATION_API_KEY, interval=DRIFT_CHECK_INTERVAL_SECONDS)
def handle_organization_api_key(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle OrganizationApiKey resource reconciliation."""
    _handler.ensure_finalizer(meta, patch)
    _handler.reconcile_with_metrics(meta, lambda: _handler.reconcile(spec, meta, status, patch))


@kopf.on.delete(API_GROUP_VERSION, KIND_ORGANIZATION_API_KEY)
def handle_organization_api_key_delete(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle OrganizationApiKey resource deletion."""
    _handler.delete(spec, meta, status, patch)
