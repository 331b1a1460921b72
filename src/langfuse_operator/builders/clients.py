"""Builder for scoped Langfuse API clients."""

from __future__ import annotations

import httpx

from ..config import OperatorConfig
from ..services.langfuse.admin import AdminClient
from ..services.langfuse.base import AdminAPI, OrganizationAPI
from ..services.langfuse.organization import OrganizationClient


class ClientFactory:
    """Builds admin and organization-scoped clients for one Langfuse host.

    The admin client is built once and reused. Organization clients are
    built per call from whichever key pair the caller holds, because that
    pair is itself a managed entity.
    """

    def __init__(
        self,
        host: str,
        admin_api_key: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize client factory.

        Args:
            host: Langfuse base URL
            admin_api_key: Admin bearer token
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport shared by every client (used by tests)
        """
        self.host = host
        self._admin_api_key = admin_api_key
        self.timeout = timeout
        self._transport = transport
        self._admin_client: AdminClient | None = None

    def new_admin_client(self) -> AdminAPI:
        """Return the admin client."""
        if self._admin_client is None:
            self._admin_client = AdminClient(
                self.host,
                self._admin_api_key,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._admin_client

    def new_organization_client(self, public_key: str, secret_key: str) -> OrganizationAPI:
        """Build a client authenticated with an organization key pair.

        Raises:
            ValueError: If either key is empty
        """
        if not public_key or not secret_key:
            raise ValueError("organization public key and secret key are required")
        return OrganizationClient(
            self.host,
            public_key,
            secret_key,
            timeout=self.timeout,
            transport=self._transport,
        )

    def close(self) -> None:
        """Close the cached admin client."""
        if self._admin_client is not None:
            self._admin_client.close()
            self._admin_client = None


def create_client_factory_from_config(config: OperatorConfig) -> ClientFactory:
    """Create a client factory from operator configuration.

    Raises:
        ValueError: If host or admin key is missing
    """
    if not config.host or not config.admin_api_key:
        raise ValueError("host and admin API key are required")
    return ClientFactory(config.host, config.admin_api_key, timeout=config.request_timeout)
