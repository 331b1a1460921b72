"""Reconciler for project API keys."""

from __future__ import annotations

from typing import Any, Mapping

from ..constants import KIND_PROJECT_API_KEY
from ..services.langfuse.models import ProjectApiKey
from .base import OrganizationScopedReconciler
from .errors import ImmutableResourceError


class ProjectApiKeyReconciler(OrganizationScopedReconciler):
    """Project API keys are created with an organization key pair and never updated."""

    kind = KIND_PROJECT_API_KEY

    def merge(self, state: Mapping[str, Any], remote: ProjectApiKey) -> dict[str, Any]:
        # public_key and secret_key always come from state
        merged = dict(state)
        merged["id"] = remote.id
        return merged

    def _create(self, config: Mapping[str, Any]) -> dict[str, Any]:
        project_id = self.require(config, "project_id")
        with self.organization_client(config) as client:
            key = client.create_project_api_key(project_id)
        return {
            "id": key.id,
            "project_id": project_id,
            "public_key": key.public_key,
            "secret_key": key.secret_key,
            **self.key_pair(config),
        }

    def _fetch(self, state: Mapping[str, Any]) -> ProjectApiKey:
        project_id = self.require(state, "project_id")
        with self.organization_client(state) as client:
            return client.find_project_api_key(project_id, state["id"])

    def update(self, config: Mapping[str, Any], state: Mapping[str, Any]) -> dict[str, Any]:
        raise ImmutableResourceError(self.kind)

    def _delete(self, state: Mapping[str, Any]) -> None:
        project_id = self.require(state, "project_id")
        with self.organization_client(state) as client:
            client.delete_project_api_key(project_id, state["id"])
