"""Shared fixtures: an in-memory Langfuse API served through httpx.MockTransport."""

from __future__ import annotations

import base64
import json
from typing import Any

import httpx
import pytest

from langfuse_operator.builders.clients import ClientFactory

HOST = "https://langfuse.test"
ADMIN_KEY = "admin-secret"


class FakeLangfuse:
    """Just enough of the Langfuse management API to reconcile against.

    Like the real service, the project listing never reports retention and
    API key listings never include the secret key.
    """

    def __init__(self, admin_key: str = ADMIN_KEY):
        self.admin_key = admin_key
        self.organizations: dict[str, dict[str, Any]] = {}
        self.org_keys: dict[str, dict[str, Any]] = {}
        self.projects: dict[str, dict[str, Any]] = {}
        self.project_keys: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_deletes = False
        self.delete_message: str | None = None
        self._counters: dict[str, int] = {}

    def next_id(self, prefix: str) -> str:
        self._counters[prefix] = self._counters.get(prefix, 0) + 1
        return f"{prefix}-{self._counters[prefix]}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")
        if parts[:2] == ["api", "admin"]:
            if request.headers.get("Authorization") != f"Bearer {self.admin_key}":
                return httpx.Response(401, json={"message": "Unauthorized"})
            return self._admin(request, parts[2:])
        if parts[:2] == ["api", "public"]:
            org_id = self._authenticated_org(request)
            if org_id is None:
                return httpx.Response(401, json={"message": "Unauthorized"})
            return self._public(request, org_id, parts[2:])
        return httpx.Response(404, json={"message": "Not Found"})

    # Helpers

    def _body(self, request: httpx.Request) -> dict[str, Any]:
        return json.loads(request.content) if request.content else {}

    def _authenticated_org(self, request: httpx.Request) -> str | None:
        header = request.headers.get("Authorization", "")
        if not header.startswith("Basic "):
            return None
        public_key, _, secret_key = base64.b64decode(header[6:]).decode().partition(":")
        for key in self.org_keys.values():
            if key["publicKey"] == public_key and key["secretKey"] == secret_key:
                return key["organizationId"]
        return None

    def new_key(self, prefix: str, **scope: str) -> dict[str, Any]:
        return {
            "id": self.next_id(prefix),
            "publicKey": self.next_id("pk"),
            "secretKey": self.next_id("sk"),
            **scope,
        }

    def _delete(self, store: dict[str, dict[str, Any]], entity_id: str) -> httpx.Response:
        if self.fail_deletes:
            body: dict[str, Any] = {"success": False}
            if self.delete_message:
                body["message"] = self.delete_message
            return httpx.Response(200, json=body)
        del store[entity_id]
        return httpx.Response(200, json={"success": True})

    @staticmethod
    def _listed_key(key: dict[str, Any]) -> dict[str, Any]:
        return {"id": key["id"], "publicKey": key["publicKey"]}

    # Routes

    def _admin(self, request: httpx.Request, rest: list[str]) -> httpx.Response:
        if rest[0] != "organizations":
            return httpx.Response(404, json={"message": "Not Found"})

        if len(rest) == 1:
            if request.method == "GET":
                return httpx.Response(200, json={"organizations": list(self.organizations.values())})
            body = self._body(request)
            org = {"id": self.next_id("org"), "name": body["name"], "metadata": body.get("metadata", {})}
            self.organizations[org["id"]] = org
            return httpx.Response(201, json=org)

        org_id = rest[1]
        if org_id not in self.organizations:
            return httpx.Response(404, json={"message": "Organization not found"})

        if len(rest) == 2:
            if request.method == "GET":
                return httpx.Response(200, json=self.organizations[org_id])
            if request.method == "PUT":
                body = self._body(request)
                org = self.organizations[org_id]
                org.update({"name": body["name"], "metadata": body.get("metadata", {})})
                return httpx.Response(200, json=org)
            return self._delete(self.organizations, org_id)

        keys = {k: v for k, v in self.org_keys.items() if v["organizationId"] == org_id}
        if len(rest) == 3:
            if request.method == "GET":
                return httpx.Response(200, json={"apiKeys": [self._listed_key(k) for k in keys.values()]})
            key = self.new_key("oak", organizationId=org_id)
            self.org_keys[key["id"]] = key
            return httpx.Response(201, json=key)

        if rest[3] not in keys:
            return httpx.Response(404, json={"message": "API key not found"})
        return self._delete(self.org_keys, rest[3])

    def _public(self, request: httpx.Request, org_id: str, rest: list[str]) -> httpx.Response:
        projects = {k: v for k, v in self.projects.items() if v["organizationId"] == org_id}

        if rest == ["organizations", "projects"]:
            listed = [{"id": p["id"], "name": p["name"], "metadata": p["metadata"]} for p in projects.values()]
            return httpx.Response(200, json={"projects": listed})

        if rest == ["projects"]:
            body = self._body(request)
            project = {
                "id": self.next_id("proj"),
                "name": body["name"],
                "retentionDays": body.get("retention", 0),
                "metadata": body.get("metadata", {}),
                "organizationId": org_id,
            }
            self.projects[project["id"]] = project
            return httpx.Response(201, json=project)

        project_id = rest[1]
        if project_id not in projects:
            return httpx.Response(404, json={"message": "Project not found"})

        if len(rest) == 2:
            if request.method == "PUT":
                body = self._body(request)
                project = self.projects[project_id]
                project.update({
                    "name": body["name"],
                    "retentionDays": body.get("retention", 0),
                    "metadata": body.get("metadata", {}),
                })
                return httpx.Response(200, json=project)
            return self._delete(self.projects, project_id)

        keys = {k: v for k, v in self.project_keys.items() if v["projectId"] == project_id}
        if len(rest) == 3:
            if request.method == "GET":
                return httpx.Response(200, json={"apiKeys": [self._listed_key(k) for k in keys.values()]})
            key = self.new_key("pak", projectId=project_id)
            self.project_keys[key["id"]] = key
            return httpx.Response(201, json=key)

        if rest[3] not in keys:
            return httpx.Response(404, json={"message": "API key not found"})
        return self._delete(self.project_keys, rest[3])


@pytest.fixture
def fake_langfuse() -> FakeLangfuse:
    return FakeLangfuse()


@pytest.fixture
def transport(fake_langfuse: FakeLangfuse) -> httpx.MockTransport:
    return httpx.MockTransport(fake_langfuse.handler)


@pytest.fixture
def factory(transport: httpx.MockTransport) -> ClientFactory:
    return ClientFactory(HOST, ADMIN_KEY, timeout=5.0, transport=transport)


@pytest.fixture
def org_key_pair(fake_langfuse: FakeLangfuse) -> dict[str, str]:
    """Seed an organization with one API key and return its key pair."""
    org_id = fake_langfuse.next_id("org")
    fake_langfuse.organizations[org_id] = {"id": org_id, "name": "Seeded", "metadata": {}}
    key = fake_langfuse.new_key("oak", organizationId=org_id)
    fake_langfuse.org_keys[key["id"]] = key
    return {
        "organization_id": org_id,
        "organization_public_key": key["publicKey"],
        "organization_secret_key": key["secretKey"],
    }
