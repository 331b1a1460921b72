"""Reconciler for Langfuse projects."""

from __future__ import annotations

from typing import Any, Mapping

from ..constants import KIND_PROJECT
from ..services.langfuse.models import Project
from .base import OrganizationScopedReconciler


class ProjectReconciler(OrganizationScopedReconciler):
    """Projects are managed with an organization key pair.

    The project listing, which is the only way to look a project up, always
    reports a retention of 0. The retention in persisted state is therefore
    authoritative and is never replaced by a looked-up value.
    """

    kind = KIND_PROJECT

    def merge(self, state: Mapping[str, Any], remote: Project) -> dict[str, Any]:
        merged = dict(state)
        merged.update({
            "id": remote.id,
            "name": remote.name,
            "metadata": dict(remote.metadata),
        })
        merged["retention_days"] = int(state.get("retention_days") or 0)
        return merged

    def _declared(self, config: Mapping[str, Any], key_pair: dict[str, Any]) -> dict[str, Any]:
        return {
            "name": self.require(config, "name"),
            "retention_days": int(config.get("retention_days") or 0),
            "metadata": dict(config.get("metadata") or {}),
            **key_pair,
        }

    def _create(self, config: Mapping[str, Any]) -> dict[str, Any]:
        declared = self._declared(config, self.key_pair(config))
        with self.organization_client(config) as client:
            project = client.create_project(
                declared["name"], declared["retention_days"], declared["metadata"] or None
            )
        return self.merge(declared, project)

    def _fetch(self, state: Mapping[str, Any]) -> Project:
        with self.organization_client(state) as client:
            return client.find_project(state["id"])

    def _update(self, config: Mapping[str, Any], state: Mapping[str, Any]) -> dict[str, Any]:
        declared = {**state, **self._declared(config, self.pick_key_pair(config, state))}
        with self.organization_client(declared) as client:
            project = client.update_project(
                state["id"], declared["name"], declared["retention_days"], declared["metadata"] or None
            )
        return self.merge(declared, project)

    def _delete(self, state: Mapping[str, Any]) -> None:
        with self.organization_client(state) as client:
            client.delete_project(state["id"])
