"""Reconciler for organization API keys."""

from __future__ import annotations

from typing import Any, Mapping

from ..constants import KIND_ORGANIZATION_API_KEY
from ..services.langfuse.models import OrganizationApiKey
from .base import BaseReconciler
from .errors import ImmutableResourceError


class OrganizationApiKeyReconciler(BaseReconciler):
    """Organization API keys are created with the admin client and never updated.

    Both keys are only returned by the create call, so persisted state is
    their only durable copy.
    """

    kind = KIND_ORGANIZATION_API_KEY

    def merge(self, state: Mapping[str, Any], remote: OrganizationApiKey) -> dict[str, Any]:
        # public_key and secret_key always come from state
        merged = dict(state)
        merged["id"] = remote.id
        return merged

    def _create(self, config: Mapping[str, Any]) -> dict[str, Any]:
        org_id = self.require(config, "organization_id")
        key = self.factory.new_admin_client().create_organization_api_key(org_id)
        return {
            "id": key.id,
            "organization_id": org_id,
            "public_key": key.public_key,
            "secret_key": key.secret_key,
        }

    def _fetch(self, state: Mapping[str, Any]) -> OrganizationApiKey:
        org_id = self.require(state, "organization_id")
        return self.factory.new_admin_client().find_organization_api_key(org_id, state["id"])

    def update(self, config: Mapping[str, Any], state: Mapping[str, Any]) -> dict[str, Any]:
        raise ImmutableResourceError(self.kind)

    def _delete(self, state: Mapping[str, Any]) -> None:
        org_id = self.require(state, "organization_id")
        self.factory.new_admin_client().delete_organization_api_key(org_id, state["id"])
