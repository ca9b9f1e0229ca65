"""
Unit tests for the role catalog.
"""

from __future__ import annotations

import pytest

from app.core.roles import RoleCatalog, get_role_catalog
from pms_shared.schemas.common import DEFAULT_ROLE_CATALOG


class TestRoleCatalog:

    def test_preserves_order(self):
        catalog = RoleCatalog(["PMC", "Customer", "Architect"])
        assert catalog.roles() == ("PMC", "Customer", "Architect")
        assert list(catalog) == ["PMC", "Customer", "Architect"]

    def test_membership(self):
        catalog = RoleCatalog(["PMC", "Architect"])
        assert catalog.is_valid("PMC")
        assert "Architect" in catalog
        assert not catalog.is_valid("NotARole")
        assert not catalog.is_valid("pmc")
        assert not catalog.is_valid(None)

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            RoleCatalog([])

    def test_duplicates_rejected(self):
        with pytest.raises(ValueError, match="PMC"):
            RoleCatalog(["PMC", "Architect", "PMC"])

    def test_blank_entry_rejected(self):
        with pytest.raises(ValueError):
            RoleCatalog(["PMC", "  "])

    def test_names_are_stripped(self):
        catalog = RoleCatalog([" PMC ", "Architect"])
        assert catalog.roles() == ("PMC", "Architect")

    def test_immutable(self):
        catalog = RoleCatalog(["PMC"])
        with pytest.raises(AttributeError):
            catalog._roles = ("Other",)

    def test_source_list_changes_do_not_leak(self):
        names = ["PMC", "Architect"]
        catalog = RoleCatalog(names)
        names.append("Designer")
        assert len(catalog) == 2


class TestDefaultCatalog:

    def test_default_roles(self):
        catalog = get_role_catalog()
        assert catalog.roles() == DEFAULT_ROLE_CATALOG
        assert len(catalog) == 12
        assert catalog.roles()[0] == "Customer"
        assert "Engineer (Contractor)" in catalog

    def test_single_instance(self):
        assert get_role_catalog() is get_role_catalog()
