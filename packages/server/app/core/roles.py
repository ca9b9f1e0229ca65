"""
Role catalog: the fixed, ordered set of role slots every project carries.

The catalog is built once from settings by ``get_role_catalog()`` and never
changes afterwards. Snapshot keys that are not in the catalog are ignored by
the reconciliation engine rather than rejected, so older or newer clients
sending extra role names keep working.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import lru_cache

from app.core.config import get_settings


class RoleCatalog:
    """Immutable ordered collection of role names."""

    __slots__ = ("_roles", "_members")

    def __init__(self, roles: Iterable[str]):
        cleaned = tuple((r or "").strip() for r in roles)
        if not cleaned:
            raise ValueError("Role catalog must not be empty")
        if any(not r for r in cleaned):
            raise ValueError("Role catalog entries must be non-blank")
        if len(set(cleaned)) != len(cleaned):
            dupes = sorted({r for r in cleaned if cleaned.count(r) > 1})
            raise ValueError(f"Duplicate roles in catalog: {', '.join(dupes)}")
        object.__setattr__(self, "_roles", cleaned)
        object.__setattr__(self, "_members", frozenset(cleaned))

    def __setattr__(self, name, value):
        raise AttributeError("RoleCatalog is immutable")

    def roles(self) -> tuple[str, ...]:
        return self._roles

    def is_valid(self, name: str | None) -> bool:
        return name in self._members

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def __repr__(self) -> str:
        return f"RoleCatalog({list(self._roles)!r})"


@lru_cache
def get_role_catalog() -> RoleCatalog:
    return RoleCatalog(get_settings().role_catalog)
