"""Utilities for managing the Kubernetes secrets that hold API key pairs."""

from __future__ import annotations

import base64
from typing import Any

from kubernetes import client

from ..constants import (
    CONTROLLER_NAME,
    FIELD_MANAGER,
    LABEL_MANAGED_BY,
    LABEL_RESOURCE_TYPE,
    SECRET_KEY_PUBLIC,
    SECRET_KEY_SECRET,
    SECRET_SUFFIX,
)


def credentials_secret_name(resource_name: str) -> str:
    """Name of the secret holding a resource's key pair."""
    return f"{resource_name}{SECRET_SUFFIX}"


def _decode(value: str | bytes) -> str:
    # Handle both string and bytes (different versions of kubernetes client)
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return base64.b64decode(value).decode("utf-8")


def read_secret_data(
    api: client.CoreV1Api,
    namespace: str,
    secret_name: str,
) -> dict[str, str]:
    """Read all data from a Kubernetes secret.

    Args:
        api: Kubernetes API client
        namespace: Namespace of the secret
        secret_name: Name of the secret

    Returns:
        Dictionary of secret data (decoded)

    Raises:
        ValueError: If secret not found
    """
    try:
        secret = api.read_namespaced_secret(name=secret_name, namespace=namespace)
    except client.exceptions.ApiException as e:
        if e.status == 404:
            raise ValueError(f"Secret '{secret_name}' not found in namespace '{namespace}'") from e
        raise
    return {key: _decode(value) for key, value in (secret.data or {}).items()}


def read_credentials(
    api: client.CoreV1Api,
    namespace: str,
    secret_name: str,
) -> tuple[str, str]:
    """Read a public/secret key pair from a credentials secret.

    Raises:
        ValueError: If the secret or one of its keys is missing
    """
    data = read_secret_data(api, namespace, secret_name)
    for key in (SECRET_KEY_PUBLIC, SECRET_KEY_SECRET):
        if not data.get(key):
            raise ValueError(f"Key '{key}' not found in secret '{secret_name}'")
    return data[SECRET_KEY_PUBLIC], data[SECRET_KEY_SECRET]


def write_credentials_secret(
    api: client.CoreV1Api,
    namespace: str,
    secret_name: str,
    public_key: str,
    secret_key: str,
    resource_type: str,
    owner_references: list[dict[str, Any]] | None = None,
) -> None:
    """Store a freshly created key pair, replacing any earlier pair.

    Args:
        api: Kubernetes API client
        namespace: Namespace for the secret
        secret_name: Name of the secret
        public_key: API public key
        secret_key: API secret key
        resource_type: Label value identifying the owning resource kind
        owner_references: Owner references for the secret
    """
    secret = client.V1Secret(
        metadata=client.V1ObjectMeta(
            name=secret_name,
            namespace=namespace,
            owner_references=owner_references or [],
            labels={
                LABEL_MANAGED_BY: CONTROLLER_NAME,
                LABEL_RESOURCE_TYPE: resource_type,
            },
        ),
        type="Opaque",
        string_data={
            SECRET_KEY_PUBLIC: public_key,
            SECRET_KEY_SECRET: secret_key,
        },
    )

    try:
        api.create_namespaced_secret(
            namespace=namespace,
            body=secret,
            field_manager=FIELD_MANAGER,
        )
    except client.exceptions.ApiException as e:
        if e.status != 409:
            raise
        # A replacement key pair overwrites the pair of the deleted key
        api.patch_namespaced_secret(
            name=secret_name,
            namespace=namespace,
            body=secret,
            field_manager=FIELD_MANAGER,
        )
