"""Langfuse admin API client (organizations and organization API keys)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import DeleteFailedError, HTTPError, NotFoundError
from .models import DeleteResult, Organization, OrganizationApiKey, organization_request
from .transport import build_request, build_url, decode_response, send

logger = logging.getLogger(__name__)


class AdminClient:
    """Client authenticated with the admin bearer token."""

    def __init__(
        self,
        host: str,
        api_key: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize admin client.

        Args:
            host: Langfuse base URL
            api_key: Admin API key sent as bearer token
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.host = host
        self._api_key = api_key
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> AdminClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _request(self, method: str, api_path: str, operation: str, body: Any = None) -> dict[str, Any]:
        request = build_request(self._client, method, build_url(self.host, api_path), body)
        request.headers["Authorization"] = f"Bearer {self._api_key}"
        return decode_response(send(self._client, request, operation))

    def list_organizations(self) -> list[Organization]:
        """List all organizations."""
        data = self._request("GET", "api/admin/organizations", "list_organizations")
        return [Organization.from_dict(org) for org in data.get("organizations") or []]

    def get_organization(self, org_id: str) -> Organization:
        """Get an organization by ID.

        Raises:
            NotFoundError: If the API answers 404
        """
        try:
            data = self._request("GET", f"api/admin/organizations/{org_id}", "get_organization")
        except HTTPError as e:
            if e.status_code == 404:
                raise NotFoundError(org_id) from e
            raise
        return Organization.from_dict(data)

    def create_organization(self, name: str, metadata: dict[str, str] | None = None) -> Organization:
        """Create an organization."""
        data = self._request(
            "POST",
            "api/admin/organizations",
            "create_organization",
            organization_request(name, metadata),
        )
        logger.info(f"Created organization {data.get('id')}")
        return Organization.from_dict(data)

    def update_organization(
        self,
        org_id: str,
        name: str,
        metadata: dict[str, str] | None = None,
    ) -> Organization:
        """Update an organization's name and metadata."""
        data = self._request(
            "PUT",
            f"api/admin/organizations/{org_id}",
            "update_organization",
            organization_request(name, metadata),
        )
        return Organization.from_dict(data)

    def delete_organization(self, org_id: str) -> None:
        """Delete an organization.

        Raises:
            DeleteFailedError: If the API reports success=false
        """
        data = self._request("DELETE", f"api/admin/organizations/{org_id}", "delete_organization")
        result = DeleteResult.from_dict(data)
        if not result.success:
            raise DeleteFailedError(org_id, result.message)

    def list_organization_api_keys(self, org_id: str) -> list[OrganizationApiKey]:
        """List the API keys of an organization. Secrets are never included."""
        data = self._request(
            "GET",
            f"api/admin/organizations/{org_id}/apiKeys",
            "list_organization_api_keys",
        )
        return [OrganizationApiKey.from_dict(key) for key in data.get("apiKeys") or []]

    def find_organization_api_key(self, org_id: str, api_key_id: str) -> OrganizationApiKey:
        """Find an organization API key by ID.

        There is no get-by-id endpoint, so this lists every key of the
        organization and scans it: O(n) in the organization's key count.

        Raises:
            NotFoundError: If no key with this ID exists in the organization
        """
        for key in self.list_organization_api_keys(org_id):
            if key.id == api_key_id:
                return key
        raise NotFoundError(api_key_id, scope=f"organization {org_id}")

    def create_organization_api_key(self, org_id: str) -> OrganizationApiKey:
        """Create an organization API key. The response is the only copy of the secret."""
        data = self._request(
            "POST",
            f"api/admin/organizations/{org_id}/apiKeys",
            "create_organization_api_key",
        )
        return OrganizationApiKey.from_dict(data)

    def delete_organization_api_key(self, org_id: str, api_key_id: str) -> None:
        """Delete an organization API key.

        Raises:
            DeleteFailedError: If the API reports success=false
        """
        data = self._request(
            "DELETE",
            f"api/admin/organizations/{org_id}/apiKeys/{api_key_id}",
            "delete_organization_api_key",
        )
        result = DeleteResult.from_dict(data)
        if not result.success:
            raise DeleteFailedError(api_key_id, result.message)
