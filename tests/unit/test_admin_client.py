"""Tests for the Langfuse admin client."""

from __future__ import annotations

import json

import httpx
import pytest

from langfuse_operator.services.langfuse.admin import AdminClient
from langfuse_operator.services.langfuse.errors import DecodeError, DeleteFailedError, HTTPError, NotFoundError

HOST = "https://langfuse.test"
ADMIN_KEY = "admin-secret"


@pytest.fixture
def admin(transport):
    with AdminClient(HOST, ADMIN_KEY, transport=transport) as client:
        yield client


class TestAdminClient:
    """Test cases for AdminClient."""

    def test_sends_bearer_token(self, admin, fake_langfuse):
        admin.list_organizations()

        request = fake_langfuse.requests[-1]
        assert request.headers["Authorization"] == f"Bearer {ADMIN_KEY}"
        assert request.url.path == "/api/admin/organizations"

    def test_wrong_token_raises_http_error(self, transport):
        with AdminClient(HOST, "wrong", transport=transport) as client:
            with pytest.raises(HTTPError) as exc_info:
                client.list_organizations()

        assert exc_info.value.status_code == 401

    def test_host_trailing_slash(self, transport, fake_langfuse):
        with AdminClient(HOST + "/", ADMIN_KEY, transport=transport) as client:
            client.list_organizations()

        assert fake_langfuse.requests[-1].url.path == "/api/admin/organizations"

    def test_create_and_get_organization(self, admin):
        created = admin.create_organization("Acme", {"team": "ml"})
        fetched = admin.get_organization(created.id)

        assert created.id == "org-1"
        assert fetched.name == "Acme"
        assert fetched.metadata == {"team": "ml"}

    def test_create_organization_omits_empty_metadata(self, admin, fake_langfuse):
        admin.create_organization("Acme")

        assert json.loads(fake_langfuse.requests[-1].content) == {"name": "Acme"}

    def test_list_organizations(self, admin):
        admin.create_organization("Acme")
        admin.create_organization("Globex")

        names = [org.name for org in admin.list_organizations()]
        assert names == ["Acme", "Globex"]

    def test_get_missing_organization_raises_not_found(self, admin):
        with pytest.raises(NotFoundError) as exc_info:
            admin.get_organization("org-404")

        assert exc_info.value.entity_id == "org-404"

    def test_update_organization(self, admin):
        org = admin.create_organization("Acme")

        updated = admin.update_organization(org.id, "Acme Corp", {"tier": "gold"})

        assert updated.name == "Acme Corp"
        assert updated.metadata == {"tier": "gold"}

    def test_delete_organization(self, admin, fake_langfuse):
        org = admin.create_organization("Acme")

        admin.delete_organization(org.id)

        assert fake_langfuse.organizations == {}
        assert fake_langfuse.requests[-1].method == "DELETE"

    def test_delete_organization_success_false(self, admin, fake_langfuse):
        org = admin.create_organization("Acme")
        fake_langfuse.fail_deletes = True

        with pytest.raises(DeleteFailedError) as exc_info:
            admin.delete_organization(org.id)

        assert exc_info.value.entity_id == org.id
        assert org.id in fake_langfuse.organizations

    def test_create_organization_api_key_returns_secret(self, admin):
        org = admin.create_organization("Acme")

        key = admin.create_organization_api_key(org.id)

        assert key.id == "oak-1"
        assert key.public_key == "pk-1"
        assert key.secret_key == "sk-1"

    def test_find_organization_api_key_scans_listing(self, admin, fake_langfuse):
        org = admin.create_organization("Acme")
        admin.create_organization_api_key(org.id)
        second = admin.create_organization_api_key(org.id)

        found = admin.find_organization_api_key(org.id, second.id)

        assert found.id == second.id
        # Listings never carry the secret
        assert found.secret_key == ""
        assert fake_langfuse.requests[-1].url.path == f"/api/admin/organizations/{org.id}/apiKeys"

    def test_find_missing_organization_api_key(self, admin):
        org = admin.create_organization("Acme")

        with pytest.raises(NotFoundError) as exc_info:
            admin.find_organization_api_key(org.id, "oak-404")

        assert exc_info.value.scope == f"organization {org.id}"
        assert str(exc_info.value) == f"cannot find entity with ID oak-404 in organization {org.id}"

    def test_delete_organization_api_key(self, admin, fake_langfuse):
        org = admin.create_organization("Acme")
        key = admin.create_organization_api_key(org.id)

        admin.delete_organization_api_key(org.id, key.id)

        assert fake_langfuse.org_keys == {}
        assert fake_langfuse.requests[-1].url.path == f"/api/admin/organizations/{org.id}/apiKeys/{key.id}"

    def test_close(self):
        client = AdminClient(HOST, ADMIN_KEY, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        client.close()
        assert client._client.is_closed

    def test_list_body_raises_decode_error(self):
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json=[]))

        with AdminClient(HOST, ADMIN_KEY, transport=transport) as client:
            with pytest.raises(DecodeError):
                client.list_organizations()
