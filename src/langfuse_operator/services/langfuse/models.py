"""Models for Langfuse management API entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Organization:
    """Langfuse organization."""

    id: str
    name: str
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Organization:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass
class OrganizationApiKey:
    """Organization-level API key. The secret is only returned on creation."""

    id: str
    public_key: str = ""
    secret_key: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrganizationApiKey:
        return cls(
            id=data.get("id", ""),
            public_key=data.get("publicKey") or "",
            secret_key=data.get("secretKey") or "",
        )


@dataclass
class Project:
    """Langfuse project.

    The project listing endpoint does not report retention, so a Project
    obtained from a lookup always has retention_days == 0.
    """

    id: str
    name: str
    retention_days: int = 0
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            retention_days=int(data.get("retentionDays") or 0),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass
class ProjectApiKey:
    """Project-level API key. The secret is only returned on creation."""

    id: str
    public_key: str = ""
    secret_key: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectApiKey:
        return cls(
            id=data.get("id", ""),
            public_key=data.get("publicKey") or "",
            secret_key=data.get("secretKey") or "",
        )


@dataclass
class DeleteResult:
    """Body of every delete response."""

    success: bool
    message: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeleteResult:
        return cls(success=bool(data.get("success", False)), message=data.get("message"))


def organization_request(name: str, metadata: dict[str, str] | None = None) -> dict[str, Any]:
    """Build the create/update organization request body."""
    body: dict[str, Any] = {"name": name}
    if metadata:
        body["metadata"] = metadata
    return body


def project_request(
    name: str,
    retention_days: int = 0,
    metadata: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build the create/update project request body."""
    body: dict[str, Any] = {"name": name, "retention": retention_days}
    if metadata:
        body["metadata"] = metadata
    return body
