"""
Tests for project data entry: normalization, uniqueness, listing.
"""

from __future__ import annotations

import pytest

from pms_shared.schemas.projects import ProjectCreate


class TestProjectSchemas:

    def test_optional_fields_default_none(self):
        req = ProjectCreate(code="p1", name="Tower", city="Pune", stage="Design")
        assert req.status is None
        assert req.health is None

    def test_required_fields(self):
        with pytest.raises(Exception):
            ProjectCreate(code="p1", name="Tower")


class TestProjectEndpoints:

    @pytest.mark.asyncio
    async def test_create_normalizes_and_defaults(self, client, admin_headers):
        response = await client.post(
            "/admin/projects",
            json={"code": " prj-9 ", "name": " Lake Residency ", "city": "Nagpur", "stage": "Planning"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["code"] == "PRJ-9"
        assert body["name"] == "Lake Residency"
        assert body["status"] == "Ongoing"
        assert body["health"] == "Good"
        assert "createdAt" in body

    @pytest.mark.asyncio
    async def test_blank_required_field(self, client, admin_headers):
        response = await client.post(
            "/admin/projects",
            json={"code": "PRJ-10", "name": " ", "city": "Nagpur", "stage": "Planning"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_duplicate_code(self, client, admin_headers, project):
        response = await client.post(
            "/admin/projects",
            json={"code": "prj-001", "name": "Copy", "city": "Pune", "stage": "Design"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert "already exists" in response.json()["error"]["message"]

    @pytest.mark.asyncio
    async def test_list_sorted_and_filtered(self, client, admin_headers, project, other_project):
        response = await client.get("/admin/projects", headers=admin_headers)
        assert [p["name"] for p in response.json()] == ["Harbour View", "Skyline Towers"]

        response = await client.get("/admin/projects", params={"q": "pune"}, headers=admin_headers)
        assert [p["code"] for p in response.json()] == ["PRJ-001"]
