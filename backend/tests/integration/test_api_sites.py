"""
Integration tests for Sites API endpoints.
"""
import uuid

import pytest
from fastapi import status


class TestSitesAPI:
    """Test sites CRUD operations."""

    @pytest.mark.asyncio
    async def test_create_site(self, async_client):
        """Test site creation applies the default configuration."""
        response = await async_client.post(
            "/api/v1/sites",
            json={"base_url": "https://www.example.org", "delivery_type": "aem_cs"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["base_url"] == "https://www.example.org"
        assert body["delivery_type"] == "aem_cs"
        assert body["config"] == {"slack": {}, "handlers": {}}

    @pytest.mark.asyncio
    async def test_create_site_schema_validation(self, async_client):
        """Test site creation validates required fields."""
        response = await async_client.post("/api/v1/sites", json={})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_create_site_invalid_config(self, async_client):
        """Test an invalid initial configuration is rejected."""
        response = await async_client.post(
            "/api/v1/sites",
            json={
                "base_url": "https://www.example.org",
                "config": {"slack": {"invitedUserCount": -12}},
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == (
            'Configuration validation error: "slack.invitedUserCount" must be greater than or equal to 0'
        )

    @pytest.mark.asyncio
    async def test_create_duplicate_site(self, async_client, db_session_with_data):
        response = await async_client.post(
            "/api/v1/sites",
            json={"base_url": "https://www.example.com"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    @pytest.mark.asyncio
    async def test_list_sites(self, async_client, db_session_with_data):
        response = await async_client.get("/api/v1/sites")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["total"] == 1
        assert body["items"][0]["base_url"] == "https://www.example.com"

    @pytest.mark.asyncio
    async def test_get_site_not_found(self, async_client):
        """Test getting non-existent site returns 404."""
        response = await async_client.get(f"/api/v1/sites/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Site not found"

    @pytest.mark.asyncio
    async def test_update_site(self, async_client, db_session_with_data, site_id):
        response = await async_client.patch(
            f"/api/v1/sites/{site_id}",
            json={"name": "Renamed"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Renamed"

    @pytest.mark.asyncio
    async def test_delete_site(self, async_client, db_session_with_data, site_id):
        response = await async_client.delete(f"/api/v1/sites/{site_id}")

        assert response.status_code == status.HTTP_200_OK
        assert (await async_client.get(f"/api/v1/sites/{site_id}")).status_code == status.HTTP_404_NOT_FOUND


class TestSiteConfigAPI:
    """Test site configuration endpoints."""

    @pytest.mark.asyncio
    async def test_get_config(self, async_client, db_session_with_data, site_id):
        response = await async_client.get(f"/api/v1/sites/{site_id}/config")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["handlers"] == {"404": {"mentions": {"slack": ["U1"]}}}

    @pytest.mark.asyncio
    async def test_replace_config(self, async_client, db_session_with_data, site_id, full_config):
        response = await async_client.put(f"/api/v1/sites/{site_id}/config", json=full_config)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == full_config

    @pytest.mark.asyncio
    async def test_replace_config_invalid(self, async_client, db_session_with_data, site_id):
        """Test validation errors carry the message and per-field details."""
        response = await async_client.put(
            f"/api/v1/sites/{site_id}/config",
            json={"handlers": {"broken-backlinks": {"groupedURLs": "not-an-array"}}},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["detail"] == (
            'Configuration validation error: "handlers.broken-backlinks.groupedURLs" must be an array'
        )
        assert body["code"] == "invalid_configuration"
        assert body["errors"][0]["path"] == ["handlers", "broken-backlinks", "groupedURLs"]
        assert body["errors"][0]["type"] == "list_type"

    @pytest.mark.asyncio
    async def test_replace_config_not_found(self, async_client):
        response = await async_client.put(f"/api/v1/sites/{uuid.uuid4()}/config", json={})

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestSiteImportsAPI:
    """Test enabling and disabling site imports."""

    @pytest.mark.asyncio
    async def test_enable_import(self, async_client, db_session_with_data, site_id):
        response = await async_client.post(f"/api/v1/sites/{site_id}/imports/organic-keywords")

        assert response.status_code == status.HTTP_200_OK
        imports = response.json()["config"]["imports"]
        assert {
            "type": "organic-keywords",
            "destinations": ["default"],
            "sources": ["ahrefs"],
            "enabled": True,
        } in imports

    @pytest.mark.asyncio
    async def test_enable_import_with_overrides(self, async_client, db_session_with_data, site_id):
        response = await async_client.post(
            f"/api/v1/sites/{site_id}/imports/organic-traffic",
            json={"sources": ["google"]},
        )

        assert response.status_code == status.HTTP_200_OK
        imports = response.json()["config"]["imports"]
        assert len(imports) == 1
        assert imports[0]["sources"] == ["google"]

    @pytest.mark.asyncio
    async def test_enable_import_invalid_overrides(self, async_client, db_session_with_data, site_id):
        response = await async_client.post(
            f"/api/v1/sites/{site_id}/imports/top-pages",
            json={"limit": 5000},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == (
            'Invalid import config: "limit" must be less than or equal to 2000'
        )

    @pytest.mark.asyncio
    async def test_enable_unknown_import(self, async_client, db_session_with_data, site_id):
        response = await async_client.post(f"/api/v1/sites/{site_id}/imports/unknown-type")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["detail"] == "Unknown import type: unknown-type"
        assert body["code"] == "unknown_import_type"

    @pytest.mark.asyncio
    async def test_disable_import(self, async_client, db_session_with_data, site_id):
        response = await async_client.delete(f"/api/v1/sites/{site_id}/imports/organic-traffic")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["config"]["imports"] == [{
            "type": "organic-traffic",
            "destinations": ["default"],
            "sources": ["ahrefs"],
            "enabled": False,
        }]

    @pytest.mark.asyncio
    async def test_import_site_not_found(self, async_client):
        response = await async_client.post(f"/api/v1/sites/{uuid.uuid4()}/imports/top-pages")

        assert response.status_code == status.HTTP_404_NOT_FOUND
