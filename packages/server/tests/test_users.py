"""
Tests for user data entry and the role picker search.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.models.user import User
from app.services.users import norm_email, norm_phone

from conftest import add_all


class TestNormalization:

    def test_email_lowercased(self):
        assert norm_email("  Asha@Example.COM ") == "asha@example.com"

    def test_blank_email_is_none(self):
        assert norm_email("   ") is None
        assert norm_email(None) is None

    def test_phone_digits_only(self):
        assert norm_phone("+91 98765-43210") == "919876543210"

    def test_phone_without_digits_is_none(self):
        assert norm_phone("n/a") is None


class TestCreateUser:

    @pytest.mark.asyncio
    async def test_create(self, client, admin_headers):
        response = await client.post(
            "/admin/users",
            json={
                "code": "u100",
                "role": "Engineer",
                "name": "Ravi Kumar",
                "email": "Ravi@Example.com",
                "phone": "(022) 555-0101",
                "isSuperAdmin": False,
            },
            headers=admin_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["code"] == "U100"
        assert body["email"] == "ravi@example.com"
        assert body["phone"] == "0225550101"
        assert body["isSuperAdmin"] is False

    @pytest.mark.asyncio
    async def test_requires_contact(self, client, admin_headers):
        response = await client.post(
            "/admin/users",
            json={"code": "U101", "role": "Engineer", "name": "No Contact"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert "email or phone" in response.json()["error"]["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"code": "u001", "role": "PMC", "name": "Dup Code", "email": "new@example.com"},
            {"code": "U200", "role": "PMC", "name": "Dup Email", "email": "ASHA@example.com"},
            {"code": "U201", "role": "PMC", "name": "Dup Phone", "phone": "98765 43210"},
        ],
    )
    async def test_uniqueness(self, client, admin_headers, users, payload):
        response = await client.post("/admin/users", json=payload, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestSearchUsers:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "q,expected",
        [
            ("asha", ["U001"]),
            ("VIKRAM@", ["U002"]),
            ("u00", ["U001", "U003", "U002"]),
            ("contractor", ["U003"]),
            ("98765", ["U003"]),
        ],
    )
    async def test_matches_fields_case_insensitive(self, client, admin_headers, users, q, expected):
        response = await client.get("/admin/users", params={"q": q}, headers=admin_headers)
        assert response.status_code == 200
        assert [u["code"] for u in response.json()] == expected

    @pytest.mark.asyncio
    async def test_blank_query_returns_recent_first(self, client, admin_headers, session_factory, admin_user):
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        await add_all(
            session_factory,
            User(code="OLD", name="Old", role="PMC", email="old@example.com", created_at=base),
            User(code="NEW", name="New", role="PMC", email="new@example.com",
                 created_at=base + timedelta(days=30)),
        )
        response = await client.get("/admin/users", headers=admin_headers)
        codes = [u["code"] for u in response.json()]
        assert codes.index("NEW") < codes.index("OLD")

    @pytest.mark.asyncio
    async def test_limited_to_fifty(self, client, admin_headers, session_factory):
        await add_all(
            session_factory,
            *[
                User(code=f"BULK{i:03d}", name=f"Bulk {i:03d}", role="Engineer", email=f"bulk{i}@example.com")
                for i in range(55)
            ],
        )
        response = await client.get("/admin/users", params={"q": "bulk"}, headers=admin_headers)
        assert len(response.json()) == 50
