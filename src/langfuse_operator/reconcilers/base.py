"""Base reconciler with the shared four-phase lifecycle."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .. import metrics
from ..builders.clients import ClientFactory
from ..services.langfuse.errors import NotFoundError
from ..services.langfuse.base import OrganizationAPI
from ..tracing import trace_span
from .errors import MissingFieldError


class BaseReconciler:
    """Create, Read, Update and Delete one kind of Langfuse entity.

    Every phase takes plain mappings (declared configuration and/or the
    persisted state) and returns the new persisted state, or None once the
    entity is absent. Phases never mutate their inputs, so a failed phase
    leaves the caller's record exactly as it was.
    """

    kind = "Entity"

    def __init__(self, factory: ClientFactory) -> None:
        self.factory = factory
        self.logger = logging.getLogger(__name__)

    def create(self, config: Mapping[str, Any]) -> dict[str, Any]:
        """Create the entity (absent -> present)."""
        with trace_span(f"create_{self.kind.lower()}", kind=self.kind):
            state = self._create(config)
        self.logger.info(f"Created {self.kind} {state['id']}")
        return state

    def read(self, state: Mapping[str, Any]) -> dict[str, Any] | None:
        """Refresh persisted state from the remote API (present -> present|absent).

        An entity that no longer exists remotely was deleted out of band; the
        record is dropped (None is returned) without raising. Any other
        failure propagates and the caller keeps its record.
        """
        entity_id = self.require(state, "id")
        with trace_span(f"read_{self.kind.lower()}", kind=self.kind):
            try:
                remote = self._fetch(state)
            except NotFoundError:
                self.logger.warning(f"{self.kind} {entity_id} not found remotely, dropping it from state")
                metrics.drift_detected_total.labels(kind=self.kind).inc()
                return None
        return self.merge(state, remote)

    def update(self, config: Mapping[str, Any], state: Mapping[str, Any]) -> dict[str, Any]:
        """Apply mutable fields from configuration (present -> present)."""
        self.require(state, "id")
        with trace_span(f"update_{self.kind.lower()}", kind=self.kind):
            new_state = self._update(config, state)
        self.logger.info(f"Updated {self.kind} {new_state['id']}")
        return new_state

    def delete(self, state: Mapping[str, Any]) -> None:
        """Delete the entity (present -> absent).

        Raises on failure; the caller keeps its record so the delete can be
        retried.
        """
        entity_id = self.require(state, "id")
        with trace_span(f"delete_{self.kind.lower()}", kind=self.kind):
            self._delete(state)
        self.logger.info(f"Deleted {self.kind} {entity_id}")

    def merge(self, state: Mapping[str, Any], remote: Any) -> dict[str, Any]:
        """Merge a remote entity into persisted state, field by field."""
        raise NotImplementedError

    def _create(self, config: Mapping[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    def _fetch(self, state: Mapping[str, Any]) -> Any:
        raise NotImplementedError

    def _update(self, config: Mapping[str, Any], state: Mapping[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    def _delete(self, state: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def require(self, data: Mapping[str, Any], field: str) -> Any:
        """Return a required field or raise MissingFieldError."""
        value = data.get(field)
        if value is None or value == "":
            raise MissingFieldError(self.kind, field)
        return value


class OrganizationScopedReconciler(BaseReconciler):
    """Reconciler for kinds managed with an organization key pair.

    The key pair travels with the entity's own configuration and state; a
    fresh organization client is built from it on every phase.
    """

    def organization_client(self, data: Mapping[str, Any]) -> OrganizationAPI:
        public_key = self.require(data, "organization_public_key")
        secret_key = self.require(data, "organization_secret_key")
        return self.factory.new_organization_client(public_key, secret_key)

    @staticmethod
    def key_pair(data: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "organization_public_key": data.get("organization_public_key"),
            "organization_secret_key": data.get("organization_secret_key"),
        }

    def pick_key_pair(self, config: Mapping[str, Any], state: Mapping[str, Any]) -> dict[str, Any]:
        """Prefer the key pair from configuration, falling back to state."""
        if config.get("organization_public_key") and config.get("organization_secret_key"):
            return self.key_pair(config)
        return self.key_pair(state)
