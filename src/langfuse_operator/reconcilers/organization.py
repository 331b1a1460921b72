"""Reconciler for Langfuse organizations."""

from __future__ import annotations

from typing import Any, Mapping

from ..constants import KIND_ORGANIZATION
from ..services.langfuse.models import Organization
from .base import BaseReconciler


class OrganizationReconciler(BaseReconciler):
    """Organizations are managed with the admin client. Name and metadata are mutable."""

    kind = KIND_ORGANIZATION

    def merge(self, state: Mapping[str, Any], remote: Organization) -> dict[str, Any]:
        merged = dict(state)
        merged.update({
            "id": remote.id,
            "name": remote.name,
            "metadata": dict(remote.metadata),
        })
        return merged

    def _create(self, config: Mapping[str, Any]) -> dict[str, Any]:
        name = self.require(config, "name")
        org = self.factory.new_admin_client().create_organization(name, config.get("metadata") or None)
        return self.merge({}, org)

    def _fetch(self, state: Mapping[str, Any]) -> Organization:
        return self.factory.new_admin_client().get_organization(state["id"])

    def _update(self, config: Mapping[str, Any], state: Mapping[str, Any]) -> dict[str, Any]:
        name = self.require(config, "name")
        org = self.factory.new_admin_client().update_organization(
            state["id"], name, config.get("metadata") or None
        )
        return self.merge(state, org)

    def _delete(self, state: Mapping[str, Any]) -> None:
        self.factory.new_admin_client().delete_organization(state["id"])
