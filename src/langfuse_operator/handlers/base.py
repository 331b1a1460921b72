"""Base handler class with the reconciliation flow shared by all CRD handlers."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable

import kopf

from .. import metrics
from ..constants import CONTROLLER_NAME, FINALIZER
from ..logging import log_resource_event
from ..reconcilers.base import BaseReconciler
from ..utils.conditions import (
    clear_failure_conditions,
    set_creation_failed_condition,
    set_dependency_not_ready_condition,
    set_drift_detected_condition,
    set_ready_condition,
    set_update_failed_condition,
)
from ..utils.context import with_correlation_id
from ..utils.errors import sanitize_exception
from ..utils.events import (
    emit_created,
    emit_deleted,
    emit_drift_detected,
    emit_reconcile_failed,
    emit_reconcile_started,
    emit_replaced,
    emit_updated,
    emit_validate_failed,
    emit_validate_succeeded,
)
from .shared import get_client_factory


class BaseHandler:
    """Base class for all CRD handlers.

    Subclasses translate between the custom resource (spec, status and
    credentials secret) and the plain configuration/state mappings of their
    reconciler. This class drives the phases:

    - no persisted id: Create
    - otherwise Read; an entity gone remotely is created again
    - an immutable field changed: Delete, then Create (replacement)
    - a mutable field changed: Update
    """

    reconciler_class: type[BaseReconciler] = BaseReconciler

    def __init__(self, kind: str):
        """Initialize base handler.

        Args:
            kind: The custom resource kind (e.g., "Organization", "Project")
        """
        self.kind = kind
        self.logger = logging.getLogger(__name__)
        self._reconciler: BaseReconciler | None = None

    @property
    def reconciler(self) -> BaseReconciler:
        if self._reconciler is None:
            self._reconciler = self.reconciler_class(get_client_factory())
        return self._reconciler

    # Translation hooks

    def build_config(self, spec: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        """Build the reconciler configuration from the resource spec."""
        raise NotImplementedError

    def build_delete_config(self, spec: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        """Configuration needed to delete; status normally carries everything."""
        return {}

    def load_state(
        self,
        config: dict[str, Any],
        status: dict[str, Any],
        meta: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Rebuild persisted state from status (and secrets). None when absent."""
        raise NotImplementedError

    def status_from_state(self, state: dict[str, Any] | None) -> dict[str, Any]:
        """Status fields for a state; every field is None when state is None."""
        raise NotImplementedError

    def store_secrets(self, state: dict[str, Any], meta: dict[str, Any]) -> dict[str, Any]:
        """Persist write-once secrets after Create. Returns extra status fields."""
        return {}

    def requires_replacement(self, config: dict[str, Any], state: dict[str, Any]) -> bool:
        """Whether an immutable field differs between config and state."""
        return False

    def needs_update(self, config: dict[str, Any], state: dict[str, Any]) -> bool:
        """Whether a mutable field differs between config and state."""
        return False

    # Logging

    def _get_resource_context(self, meta: dict[str, Any]) -> dict[str, Any]:
        return {
            "name": meta.get("name", "unknown"),
            "namespace": meta.get("namespace", "default"),
            "uid": meta.get("uid", "unknown"),
        }

    def _log(
        self,
        level: int,
        meta: dict[str, Any],
        message: str,
        event: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        ctx = self._get_resource_context(meta)
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=self.kind,
            resource_name=ctx["name"],
            namespace=ctx["namespace"],
            uid=ctx["uid"],
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def log_info(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "info",
        reason: str = "Info",
        **kwargs: Any,
    ) -> None:
        """Log an info-level structured log message."""
        self._log(logging.INFO, meta, message, event, reason, **kwargs)

    def log_warning(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "warning",
        reason: str = "Warning",
        **kwargs: Any,
    ) -> None:
        """Log a warning-level structured log message."""
        self._log(logging.WARNING, meta, message, event, reason, **kwargs)

    def log_error(
        self,
        meta: dict[str, Any],
        message: str,
        error: Exception | None = None,
        event: str = "error",
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            meta: Kubernetes resource metadata
            message: Log message
            error: Optional exception to include sanitized error details
            event: Event type (default: "error")
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        log_data = kwargs.copy()
        if error is not None:
            log_data["error"] = sanitize_exception(error)
            log_data["error_type"] = type(error).__name__
        self._log(logging.ERROR, meta, message, event, reason, **log_data)

    # Finalizers

    def ensure_finalizer(self, meta: dict[str, Any], patch: kopf.Patch) -> None:
        """Ensure finalizer is present in metadata."""
        finalizers = list(meta.get("finalizers", []))
        if FINALIZER not in finalizers:
            finalizers.append(FINALIZER)
            patch.metadata["finalizers"] = finalizers

    def remove_finalizer(self, meta: dict[str, Any], patch: kopf.Patch) -> None:
        """Remove finalizer from metadata."""
        finalizers = list(meta.get("finalizers", []))
        if FINALIZER in finalizers:
            finalizers.remove(FINALIZER)
            patch.metadata["finalizers"] = finalizers if finalizers else None

    # Error handling

    def handle_validation_error(self, meta: dict[str, Any], error_msg: str) -> None:
        """Handle validation error consistently.

        Raises:
            kopf.PermanentError: Always; an invalid spec is not retried until it changes
        """
        self.log_error(meta, error_msg, reason="ValidationFailed")
        emit_validate_failed(meta, error_msg)
        metrics.reconcile_total.labels(kind=self.kind, result="failed").inc()
        raise kopf.PermanentError(error_msg)

    def handle_dependency_not_ready(
        self,
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
        error: kopf.TemporaryError,
    ) -> None:
        """Record a missing or unready referenced resource and re-raise for retry."""
        error_msg = str(error)
        self.log_warning(meta, error_msg, reason="DependencyNotReady")
        conditions = set_dependency_not_ready_condition(status.get("conditions", []), error_msg)
        emit_reconcile_failed(meta, error_msg)
        metrics.reconcile_total.labels(kind=self.kind, result="failed").inc()
        patch.status.update({
            "conditions": conditions,
            "observedGeneration": meta.get("generation", 0),
        })
        raise error

    def handle_reconciliation_error(
        self,
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
        error: Exception,
        condition_fn: Callable[[list[dict[str, Any]], str], list[dict[str, Any]]],
    ) -> None:
        """Record a failed phase on the resource status; the caller re-raises."""
        error_msg = f"Reconciliation failed: {sanitize_exception(error)}"
        self.log_error(meta, error_msg, error=error, reason="ReconciliationFailed")
        conditions = condition_fn(status.get("conditions", []), error_msg)
        patch.status.update({
            "conditions": conditions,
            "observedGeneration": meta.get("generation", 0),
        })

    # Flow

    def reconcile_with_metrics(
        self,
        meta: dict[str, Any],
        reconcile_fn: Callable[[], None],
    ) -> None:
        """Execute reconciliation with metrics and error handling."""
        with with_correlation_id():
            emit_reconcile_started(meta)
            metrics.reconcile_total.labels(kind=self.kind, result="started").inc()

            start_time = time.time()
            try:
                reconcile_fn()
                metrics.reconcile_total.labels(kind=self.kind, result="success").inc()
            except (kopf.TemporaryError, kopf.PermanentError):
                raise
            except Exception as e:
                metrics.error_total.labels(kind=self.kind, error_type=type(e).__name__).inc()
                self.log_error(meta, "Reconciliation failed", error=e, reason="ReconciliationFailed")
                emit_reconcile_failed(meta, f"Reconciliation failed: {sanitize_exception(e)}")
                metrics.reconcile_total.labels(kind=self.kind, result="error").inc()
                raise
            finally:
                duration = time.time() - start_time
                metrics.reconcile_duration_seconds.labels(kind=self.kind).observe(duration)

    def reconcile(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Converge the remote entity and the resource status towards the spec."""
        try:
            config = self.build_config(spec, meta)
        except kopf.TemporaryError as e:
            self.handle_dependency_not_ready(meta, status, patch, e)
            return
        except ValueError as e:
            self.handle_validation_error(meta, str(e))
            return
        emit_validate_succeeded(meta)

        conditions = clear_failure_conditions(status.get("conditions", []))
        state = self.load_state(config, status, meta)
        extra_status: dict[str, Any] = {}

        if state is not None:
            entity_id = state["id"]
            refreshed = self.reconciler.read(state)
            if refreshed is None:
                self.log_warning(meta, f"{self.kind} {entity_id} was deleted out of band", reason="DriftDetected")
                emit_drift_detected(meta, self.kind, entity_id)
                conditions = set_drift_detected_condition(conditions, True, f"{self.kind} {entity_id} not found")
                patch.status.update(self.status_from_state(None))
            else:
                conditions = set_drift_detected_condition(conditions, False, "Entity exists")
            state = refreshed

        if state is None:
            try:
                state = self.reconciler.create(config)
            except Exception as e:
                self.handle_reconciliation_error(meta, status, patch, e, set_creation_failed_condition)
                raise
            extra_status = self.commit_created(state, meta, status, patch)
            emit_created(meta, self.kind, state["id"])
        elif self.requires_replacement(config, state):
            old_id = state["id"]
            try:
                self.reconciler.delete(state)
                patch.status.update(self.status_from_state(None))
                state = self.reconciler.create(config)
            except Exception as e:
                self.handle_reconciliation_error(meta, status, patch, e, set_creation_failed_condition)
                raise
            extra_status = self.commit_created(state, meta, status, patch)
            emit_replaced(meta, self.kind, old_id, state["id"])
        elif self.needs_update(config, state):
            try:
                state = self.reconciler.update(config, state)
            except Exception as e:
                self.handle_reconciliation_error(meta, status, patch, e, set_update_failed_condition)
                raise
            emit_updated(meta, self.kind, state["id"])

        conditions = set_ready_condition(conditions, True, f"{self.kind} {state['id']} is ready")
        self.update_resource_status(
            patch,
            meta,
            True,
            {
                **self.status_from_state(state),
                **extra_status,
                "lastSyncTime": datetime.now(timezone.utc).isoformat(),
                "conditions": conditions,
            },
        )

    def commit_created(
        self,
        state: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> dict[str, Any]:
        """Record a freshly created entity and store its write-once secrets.

        The identifiers reach the status before the secrets are written. When
        the secrets cannot be stored, the new entity is deleted again and the
        error re-raised, so a retry never leaves an unreachable key behind.

        Returns:
            Extra status fields from store_secrets
        """
        patch.status.update(self.status_from_state(state))
        try:
            return self.store_secrets(state, meta)
        except Exception as e:
            self.handle_reconciliation_error(meta, status, patch, e, set_creation_failed_condition)
            self.discard_created(state, meta, patch)
            raise

    def discard_created(self, state: dict[str, Any], meta: dict[str, Any], patch: kopf.Patch) -> None:
        """Delete an entity whose secrets could not be stored.

        If that delete fails too, the identifiers stay in the status and the
        next reconcile replaces the entity.
        """
        entity_id = state["id"]
        try:
            self.reconciler.delete(state)
        except Exception as e:
            self.log_error(meta, f"Failed to discard {self.kind} {entity_id}", error=e, reason="DeleteFailed")
            metrics.error_total.labels(kind=self.kind, error_type=type(e).__name__).inc()
            return
        patch.status.update(self.status_from_state(None))
        self.log_warning(
            meta, f"Discarded {self.kind} {entity_id} after its secrets could not be stored", reason="Discarded"
        )

    def delete(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Delete the remote entity, then release the finalizer.

        A failed delete keeps the finalizer and re-raises so kopf retries.
        """
        self.log_info(meta, f"{self.kind} is being deleted", event="deletion", reason="Deletion")
        with with_correlation_id():
            config = self.build_delete_config(spec, meta)
            state = self.load_state(config, status, meta)
            if state is not None:
                entity_id = state["id"]
                # Already gone remotely: nothing to delete
                if self.reconciler.read(state) is not None:
                    try:
                        self.reconciler.delete(state)
                    except Exception as e:
                        self.log_error(meta, f"Failed to delete {self.kind} {entity_id}", error=e, reason="DeleteFailed")
                        emit_reconcile_failed(meta, f"Delete failed: {sanitize_exception(e)}")
                        metrics.error_total.labels(kind=self.kind, error_type=type(e).__name__).inc()
                        raise
                    emit_deleted(meta, self.kind, entity_id)
            self.remove_finalizer(meta, patch)

    def update_resource_status(
        self,
        patch: kopf.Patch,
        meta: dict[str, Any],
        ready: bool,
        status_data: dict[str, Any] | None = None,
    ) -> None:
        """Update resource status with common fields."""
        status_update = {
            "observedGeneration": meta.get("generation", 0),
            **(status_data or {}),
        }

        metrics.resource_status_total.labels(kind=self.kind, status="ready" if ready else "not_ready").inc()
        patch.status.update(status_update)
