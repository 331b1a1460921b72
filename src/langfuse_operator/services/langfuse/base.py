"""Protocols for the scoped Langfuse API clients."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .models import Organization, OrganizationApiKey, Project, ProjectApiKey


@runtime_checkable
class AdminAPI(Protocol):
    """Operations available with the admin bearer token."""

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        ...

    def __enter__(self) -> AdminAPI:
        ...

    def __exit__(self, *exc: Any) -> None:
        ...

    def list_organizations(self) -> list[Organization]:
        """List all organizations."""
        ...

    def get_organization(self, org_id: str) -> Organization:
        """Get an organization by ID."""
        ...

    def create_organization(self, name: str, metadata: dict[str, str] | None = None) -> Organization:
        """Create an organization."""
        ...

    def update_organization(
        self, org_id: str, name: str, metadata: dict[str, str] | None = None
    ) -> Organization:
        """Update an organization's name and metadata."""
        ...

    def delete_organization(self, org_id: str) -> None:
        """Delete an organization."""
        ...

    def list_organization_api_keys(self, org_id: str) -> list[OrganizationApiKey]:
        """List the API keys of an organization."""
        ...

    def find_organization_api_key(self, org_id: str, api_key_id: str) -> OrganizationApiKey:
        """Find an organization API key by scanning the listing."""
        ...

    def create_organization_api_key(self, org_id: str) -> OrganizationApiKey:
        """Create an organization API key."""
        ...

    def delete_organization_api_key(self, org_id: str, api_key_id: str) -> None:
        """Delete an organization API key."""
        ...


@runtime_checkable
class OrganizationAPI(Protocol):
    """Operations available with an organization key pair."""

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        ...

    def __enter__(self) -> OrganizationAPI:
        ...

    def __exit__(self, *exc: Any) -> None:
        ...

    def list_projects(self) -> list[Project]:
        """List the organization's projects."""
        ...

    def find_project(self, project_id: str) -> Project:
        """Find a project by scanning the listing."""
        ...

    def create_project(
        self, name: str, retention_days: int = 0, metadata: dict[str, str] | None = None
    ) -> Project:
        """Create a project."""
        ...

    def update_project(
        self,
        project_id: str,
        name: str,
        retention_days: int = 0,
        metadata: dict[str, str] | None = None,
    ) -> Project:
        """Update a project."""
        ...

    def delete_project(self, project_id: str) -> None:
        """Delete a project."""
        ...

    def list_project_api_keys(self, project_id: str) -> list[ProjectApiKey]:
        """List the API keys of a project."""
        ...

    def find_project_api_key(self, project_id: str, api_key_id: str) -> ProjectApiKey:
        """Find a project API key by scanning the listing."""
        ...

    def create_project_api_key(self, project_id: str) -> ProjectApiKey:
        """Create a project API key."""
        ...

    def delete_project_api_key(self, project_id: str, api_key_id: str) -> None:
        """Delete a project API key."""
        ...
