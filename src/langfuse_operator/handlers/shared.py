"""Shared utilities for handlers: Kubernetes clients and reference resolution."""

from __future__ import annotations

import logging
import time
from typing import Any

import kopf
from kubernetes import client

from .. import metrics
from ..builders.clients import ClientFactory, create_client_factory_from_config
from ..config import get_config
from ..constants import (
    API_GROUP,
    API_GROUP_VERSION,
    PLURAL_ORGANIZATION_API_KEYS,
    PLURAL_ORGANIZATIONS,
    PLURAL_PROJECTS,
)
from ..utils.conditions import is_ready
from ..utils.secrets import credentials_secret_name, read_credentials, write_credentials_secret

logger = logging.getLogger(__name__)

_client_factory: ClientFactory | None = None


def get_client_factory() -> ClientFactory:
    """Get the process-wide Langfuse client factory."""
    global _client_factory
    if _client_factory is None:
        _client_factory = create_client_factory_from_config(get_config())
    return _client_factory


def close_client_factory() -> None:
    """Close and forget the process-wide client factory."""
    global _client_factory
    if _client_factory is not None:
        _client_factory.close()
        _client_factory = None


def _load_kube_config() -> None:
    from kubernetes import config

    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()


def get_k8s_client() -> client.CustomObjectsApi:
    """Get Kubernetes CustomObjectsApi client."""
    _load_kube_config()
    return client.CustomObjectsApi()


def get_core_client() -> client.CoreV1Api:
    """Get Kubernetes CoreV1Api client."""
    _load_kube_config()
    return client.CoreV1Api()


def get_custom_object(
    api: client.CustomObjectsApi,
    plural: str,
    namespace: str,
    name: str,
) -> dict[str, Any]:
    """Get one of the operator's custom resources.

    Raises:
        client.exceptions.ApiException: If not found or API error
    """
    operation = f"get_{plural}"
    start_time = time.time()
    try:
        obj = api.get_namespaced_custom_object(
            group=API_GROUP,
            version="v1alpha1",
            namespace=namespace,
            plural=plural,
            name=name,
        )
        metrics.api_call_total.labels(api_type="k8s", operation=operation, result="success").inc()
        return obj
    except Exception:
        metrics.api_call_total.labels(api_type="k8s", operation=operation, result="error").inc()
        raise
    finally:
        duration = time.time() - start_time
        metrics.api_call_duration_seconds.labels(api_type="k8s", operation=operation).observe(duration)


def get_ready_dependency(
    api: client.CustomObjectsApi,
    plural: str,
    kind: str,
    namespace: str,
    name: str,
) -> dict[str, Any]:
    """Get a referenced resource that must exist and be Ready.

    Raises:
        kopf.TemporaryError: If the resource is missing or not ready yet
    """
    try:
        obj = get_custom_object(api, plural, namespace, name)
    except client.exceptions.ApiException as e:
        if e.status == 404:
            raise kopf.TemporaryError(f"{kind} {name} not found in namespace {namespace}", delay=30) from e
        raise
    if not is_ready(obj):
        raise kopf.TemporaryError(f"{kind} {name} is not ready", delay=15)
    return obj


def _ref_name(spec: dict[str, Any], ref_field: str) -> str | None:
    return (spec.get(ref_field) or {}).get("name")


def _ref_namespace(spec: dict[str, Any], ref_field: str, namespace: str) -> str:
    return (spec.get(ref_field) or {}).get("namespace", namespace)


def resolve_organization_id(spec: dict[str, Any], namespace: str) -> str:
    """Resolve spec.organizationId or spec.organizationRef to a Langfuse organization ID.

    Raises:
        ValueError: If neither is given
        kopf.TemporaryError: If the referenced Organization is not ready
    """
    if spec.get("organizationId"):
        return spec["organizationId"]
    name = _ref_name(spec, "organizationRef")
    if not name:
        raise ValueError("organizationRef.name or organizationId is required")
    obj = get_ready_dependency(
        get_k8s_client(),
        PLURAL_ORGANIZATIONS,
        "Organization",
        _ref_namespace(spec, "organizationRef", namespace),
        name,
    )
    org_id = obj.get("status", {}).get("organizationId")
    if not org_id:
        raise kopf.TemporaryError(f"Organization {name} has no organizationId yet", delay=15)
    return org_id


def resolve_project_id(spec: dict[str, Any], namespace: str) -> str:
    """Resolve spec.projectId or spec.projectRef to a Langfuse project ID.

    Raises:
        ValueError: If neither is given
        kopf.TemporaryError: If the referenced Project is not ready
    """
    if spec.get("projectId"):
        return spec["projectId"]
    name = _ref_name(spec, "projectRef")
    if not name:
        raise ValueError("projectRef.name or projectId is required")
    obj = get_ready_dependency(
        get_k8s_client(),
        PLURAL_PROJECTS,
        "Project",
        _ref_namespace(spec, "projectRef", namespace),
        name,
    )
    project_id = obj.get("status", {}).get("projectId")
    if not project_id:
        raise kopf.TemporaryError(f"Project {name} has no projectId yet", delay=15)
    return project_id


def resolve_organization_credentials(spec: dict[str, Any], namespace: str) -> dict[str, str]:
    """Resolve the organization key pair used to authenticate project operations.

    Either spec.organizationApiKeyRef (an OrganizationApiKey resource) or
    spec.organizationCredentialsSecretRef (a secret with public-key and
    secret-key entries) must be given.

    Returns:
        Dict with organization_public_key and organization_secret_key

    Raises:
        ValueError: If no reference is given
        kopf.TemporaryError: If the key or its secret is not available yet
    """
    secret_ref = spec.get("organizationCredentialsSecretRef") or {}
    if secret_ref.get("name"):
        secret_name = secret_ref["name"]
        secret_ns = secret_ref.get("namespace", namespace)
    else:
        name = _ref_name(spec, "organizationApiKeyRef")
        if not name:
            raise ValueError("organizationApiKeyRef.name or organizationCredentialsSecretRef.name is required")
        secret_ns = _ref_namespace(spec, "organizationApiKeyRef", namespace)
        obj = get_ready_dependency(
            get_k8s_client(),
            PLURAL_ORGANIZATION_API_KEYS,
            "OrganizationApiKey",
            secret_ns,
            name,
        )
        secret_name = obj.get("status", {}).get("secretName")
        if not secret_name:
            raise kopf.TemporaryError(f"OrganizationApiKey {name} has no credentials secret yet", delay=15)

    try:
        public_key, secret_key = read_credentials(get_core_client(), secret_ns, secret_name)
    except ValueError as e:
        raise kopf.TemporaryError(str(e), delay=30) from e
    return {"organization_public_key": public_key, "organization_secret_key": secret_key}


def owner_reference(meta: dict[str, Any], kind: str, api_version: str) -> dict[str, Any]:
    """Owner reference pointing at a custom resource."""
    return {
        "apiVersion": api_version,
        "kind": kind,
        "name": meta.get("name"),
        "uid": meta.get("uid"),
        "controller": True,
        "blockOwnerDeletion": True,
    }


def load_stored_key_pair(namespace: str, secret_name: str | None) -> dict[str, str]:
    """Read a write-once key pair back from its credentials secret.

    A missing secret yields empty keys: the pair cannot be recovered from the
    remote API, but the key can still be read and deleted by ID.
    """
    if not secret_name:
        return {"public_key": "", "secret_key": ""}
    try:
        public_key, secret_key = read_credentials(get_core_client(), namespace, secret_name)
    except ValueError as e:
        logger.warning(f"Stored key pair unavailable: {e}")
        return {"public_key": "", "secret_key": ""}
    return {"public_key": public_key, "secret_key": secret_key}


def store_key_pair(
    meta: dict[str, Any],
    state: dict[str, Any],
    kind: str,
    resource_type: str,
) -> str:
    """Write a freshly created key pair into the resource's credentials secret.

    Returns:
        The secret name
    """
    namespace = meta.get("namespace", "default")
    secret_name = credentials_secret_name(meta.get("name", "unknown"))
    write_credentials_secret(
        get_core_client(),
        namespace,
        secret_name,
        state["public_key"],
        state["secret_key"],
        resource_type=resource_type,
        owner_references=[owner_reference(meta, kind, API_GROUP_VERSION)],
    )
    return secret_name
