"""Per-kind reconcilers for Langfuse entities."""

from .base import BaseReconciler
from .errors import ImmutableResourceError, MissingFieldError, ReconcileError
from .organization import OrganizationReconciler
from .organization_api_key import OrganizationApiKeyReconciler
from .project import ProjectReconciler
from .project_api_key import ProjectApiKeyReconciler

__all__ = [
    "BaseReconciler",
    "OrganizationReconciler",
    "OrganizationApiKeyReconciler",
    "ProjectReconciler",
    "ProjectApiKeyReconciler",
    "ReconcileError",
    "MissingFieldError",
    "ImmutableResourceError",
]
