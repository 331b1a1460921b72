"""Tests for Kubernetes secrets utilities."""

from __future__ import annotations

import base64
from unittest.mock import Mock

import pytest
from kubernetes import client

from langfuse_operator.utils.secrets import (
    credentials_secret_name,
    read_credentials,
    read_secret_data,
    write_credentials_secret,
)


def _encoded(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("utf-8")


class TestReadSecretData:
    """Test cases for read_secret_data function."""

    def test_decodes_base64_values(self):
        """Test successfully reading secret data."""
        mock_api = Mock()
        mock_api.read_namespaced_secret.return_value = Mock(data={"public-key": _encoded("pk-1")})

        result = read_secret_data(mock_api, "default", "acme-key-credentials")

        assert result == {"public-key": "pk-1"}
        mock_api.read_namespaced_secret.assert_called_once_with(
            name="acme-key-credentials", namespace="default"
        )

    def test_bytes_values(self):
        """Test reading secret values that are already bytes."""
        mock_api = Mock()
        mock_api.read_namespaced_secret.return_value = Mock(data={"public-key": b"pk-1"})

        assert read_secret_data(mock_api, "default", "s") == {"public-key": "pk-1"}

    def test_secret_not_found(self):
        """Test error when secret not found."""
        mock_api = Mock()
        mock_api.read_namespaced_secret.side_effect = client.exceptions.ApiException(status=404)

        with pytest.raises(ValueError, match="Secret 'missing' not found"):
            read_secret_data(mock_api, "default", "missing")

    def test_api_error(self):
        """Test handling of other API errors."""
        mock_api = Mock()
        mock_api.read_namespaced_secret.side_effect = client.exceptions.ApiException(status=500)

        with pytest.raises(client.exceptions.ApiException):
            read_secret_data(mock_api, "default", "s")


class TestReadCredentials:
    """Test cases for read_credentials function."""

    def test_returns_key_pair(self):
        mock_api = Mock()
        mock_api.read_namespaced_secret.return_value = Mock(
            data={"public-key": _encoded("pk-1"), "secret-key": _encoded("sk-1")}
        )

        assert read_credentials(mock_api, "default", "s") == ("pk-1", "sk-1")

    def test_missing_key(self):
        mock_api = Mock()
        mock_api.read_namespaced_secret.return_value = Mock(data={"public-key": _encoded("pk-1")})

        with pytest.raises(ValueError, match="Key 'secret-key' not found"):
            read_credentials(mock_api, "default", "s")


class TestWriteCredentialsSecret:
    """Test cases for write_credentials_secret function."""

    def test_creates_secret(self):
        mock_api = Mock()
        owner = [{"kind": "OrganizationApiKey", "name": "acme-key", "uid": "u-1"}]

        write_credentials_secret(
            mock_api,
            "default",
            "acme-key-credentials",
            "pk-1",
            "sk-1",
            resource_type="organization-api-key",
            owner_references=owner,
        )

        mock_api.create_namespaced_secret.assert_called_once()
        body = mock_api.create_namespaced_secret.call_args.kwargs["body"]
        assert body.string_data == {"public-key": "pk-1", "secret-key": "sk-1"}
        assert body.metadata.name == "acme-key-credentials"
        assert body.metadata.owner_references == owner
        assert body.metadata.labels["langfuse.operator.dev/resource-type"] == "organization-api-key"
        mock_api.patch_namespaced_secret.assert_not_called()

    def test_existing_secret_is_patched(self):
        mock_api = Mock()
        mock_api.create_namespaced_secret.side_effect = client.exceptions.ApiException(status=409)

        write_credentials_secret(mock_api, "default", "s", "pk-2", "sk-2", resource_type="project-api-key")

        mock_api.patch_namespaced_secret.assert_called_once()
        body = mock_api.patch_namespaced_secret.call_args.kwargs["body"]
        assert body.string_data["secret-key"] == "sk-2"

    def test_other_errors_propagate(self):
        mock_api = Mock()
        mock_api.create_namespaced_secret.side_effect = client.exceptions.ApiException(status=403)

        with pytest.raises(client.exceptions.ApiException):
            write_credentials_secret(mock_api, "default", "s", "pk", "sk", resource_type="project-api-key")


def test_credentials_secret_name():
    assert credentials_secret_name("acme-key") == "acme-key-credentials"
