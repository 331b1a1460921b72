"""Builders for API clients."""

from .clients import ClientFactory, create_client_factory_from_config

__all__ = ["ClientFactory", "create_client_factory_from_config"]
