"""Langfuse organization-scoped API client (projects and project API keys)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import DeleteFailedError, NotFoundError
from .models import DeleteResult, Project, ProjectApiKey, project_request
from .transport import build_request, build_url, decode_response, send

logger = logging.getLogger(__name__)


class OrganizationClient:
    """Client authenticated with an organization API key pair (basic auth)."""

    def __init__(
        self,
        host: str,
        public_key: str,
        secret_key: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize organization client.

        Args:
            host: Langfuse base URL
            public_key: Organization API public key (basic auth user)
            secret_key: Organization API secret key (basic auth password)
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.host = host
        self.public_key = public_key
        self._client = httpx.Client(
            auth=httpx.BasicAuth(public_key, secret_key),
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> OrganizationClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _request(self, method: str, api_path: str, operation: str, body: Any = None) -> dict[str, Any]:
        request = build_request(self._client, method, build_url(self.host, api_path), body)
        return decode_response(send(self._client, request, operation))

    def list_projects(self) -> list[Project]:
        """List the organization's projects.

        The listing never reports retention; every project comes back with
        retention_days == 0.
        """
        data = self._request("GET", "api/public/organizations/projects", "list_projects")
        return [Project.from_dict(project) for project in data.get("projects") or []]

    def find_project(self, project_id: str) -> Project:
        """Find a project by ID.

        There is no get-by-id endpoint, so this lists every project of the
        organization and scans it: O(n) in the project count. The returned
        retention_days is always 0.

        Raises:
            NotFoundError: If no project with this ID exists
        """
        for project in self.list_projects():
            if project.id == project_id:
                return project
        raise NotFoundError(project_id)

    def create_project(
        self,
        name: str,
        retention_days: int = 0,
        metadata: dict[str, str] | None = None,
    ) -> Project:
        """Create a project. A retention of 0 keeps data indefinitely."""
        data = self._request(
            "POST",
            "api/public/projects",
            "create_project",
            project_request(name, retention_days, metadata),
        )
        logger.info(f"Created project {data.get('id')}")
        return Project.from_dict(data)

    def update_project(
        self,
        project_id: str,
        name: str,
        retention_days: int = 0,
        metadata: dict[str, str] | None = None,
    ) -> Project:
        """Update a project's name, retention and metadata."""
        data = self._request(
            "PUT",
            f"api/public/projects/{project_id}",
            "update_project",
            project_request(name, retention_days, metadata),
        )
        return Project.from_dict(data)

    def delete_project(self, project_id: str) -> None:
        """Delete a project.

        Raises:
            DeleteFailedError: If the API reports success=false, with its message
        """
        data = self._request("DELETE", f"api/public/projects/{project_id}", "delete_project")
        result = DeleteResult.from_dict(data)
        if not result.success:
            raise DeleteFailedError(project_id, result.message)

    def list_project_api_keys(self, project_id: str) -> list[ProjectApiKey]:
        """List the API keys of a project. Secrets are never included."""
        data = self._request(
            "GET",
            f"api/public/projects/{project_id}/apiKeys",
            "list_project_api_keys",
        )
        return [ProjectApiKey.from_dict(key) for key in data.get("apiKeys") or []]

    def find_project_api_key(self, project_id: str, api_key_id: str) -> ProjectApiKey:
        """Find a project API key by ID.

        Lists every key of the project and scans it: O(n) in the key count.

        Raises:
            NotFoundError: If no key with this ID exists in the project
        """
        for key in self.list_project_api_keys(project_id):
            if key.id == api_key_id:
                return key
        raise NotFoundError(api_key_id, scope=f"project {project_id}")

    def create_project_api_key(self, project_id: str) -> ProjectApiKey:
        """Create a project API key. The response is the only copy of the secret."""
        data = self._request(
            "POST",
            f"api/public/projects/{project_id}/apiKeys",
            "create_project_api_key",
        )
        return ProjectApiKey.from_dict(data)

    def delete_project_api_key(self, project_id: str, api_key_id: str) -> None:
        """Delete a project API key.

        Raises:
            DeleteFailedError: If the API reports success=false
        """
        data = self._request(
            "DELETE",
            f"api/public/projects/{project_id}/apiKeys/{api_key_id}",
            "delete_project_api_key",
        )
        result = DeleteResult.from_dict(data)
        if not result.success:
            raise DeleteFailedError(api_key_id, result.message)
