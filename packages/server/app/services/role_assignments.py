"""
Role assignment reconciliation engine.

Brings a project's persisted memberships in line with a desired snapshot
``{role: user_id | None}`` using the smallest set of deletes and creates.

Per role slot, in catalog order:
- same occupant (or both empty): nothing to do
- occupant present and different (or cleared): delete the slot's records
- desired occupant present and not already seated: create a new record

The delete always precedes the create for a slot and clears every record
stored for it, so replacing user A with user B leaves exactly one record in
the slot even when older duplicates were present. A whole snapshot is
applied in one transaction; any failure rolls every slot back.

Concurrency: two snapshots for the same project are not serialized here.
The last commit wins. Only a unique-constraint conflict fails the loser with
StorageError (rolling back its changes); a delete that finds its row already
gone removes nothing and does not raise. There is no merge.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import unit_of_work
from app.core.exceptions import ForeignKeyError, ValidationError
from app.core.roles import RoleCatalog
from app.services.memberships import MembershipRepository, index_by_role
from app.services.projects import norm_str, project_exists
from app.services.users import user_exists

log = structlog.get_logger()


@dataclass(frozen=True)
class MembershipOp:
    action: Literal["delete", "create"]
    role: str
    user_id: Optional[str]
    assignment_id: Optional[str] = None


@dataclass
class ReconciliationResult:
    project_id: str
    operations: list[MembershipOp] = field(default_factory=list)

    @property
    def created(self) -> int:
        return sum(1 for op in self.operations if op.action == "create")

    @property
    def deleted(self) -> int:
        return sum(1 for op in self.operations if op.action == "delete")

    @property
    def changed(self) -> bool:
        return bool(self.operations)


def normalize_snapshot(
    catalog: RoleCatalog, desired: Mapping[str, Optional[str]]
) -> dict[str, Optional[str]]:
    """Restrict a snapshot to the catalog; absent or blank values become None."""
    if not isinstance(desired, Mapping):
        raise ValidationError("assignments object is required")

    target: dict[str, Optional[str]] = {}
    for role in catalog:
        value = desired.get(role)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"Assignment for role {role!r} must be a user id or null")
        target[role] = norm_str(value) or None
    return target


def plan_reconciliation(
    catalog: RoleCatalog,
    current: Mapping[str, dict],
    desired: Mapping[str, Optional[str]],
) -> list[MembershipOp]:
    """Ordered operations that turn ``current`` into ``desired``.

    ``current`` maps role to its stored record (``id`` and ``user_id``).
    """
    return _plan_slots(catalog, current, normalize_snapshot(catalog, desired))


def _plan_slots(
    catalog: RoleCatalog,
    current: Mapping[str, dict],
    target: Mapping[str, Optional[str]],
) -> list[MembershipOp]:
    ops: list[MembershipOp] = []
    for role in catalog:
        record = current.get(role)
        current_user = record["user_id"] if record else None
        next_user = target[role]

        if current_user == next_user:
            continue
        if record is not None:
            ops.append(
                MembershipOp("delete", role, current_user, assignment_id=record["id"])
            )
        if next_user is not None:
            ops.append(MembershipOp("create", role, next_user))
    return ops


class ReconciliationEngine:
    """Reads and rewrites the role slots of a project.

    Stateless between calls: each operation opens its own session from the
    factory it was built with.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        catalog: RoleCatalog,
    ):
        self.session_factory = session_factory
        self.catalog = catalog

    def _require(self, **fields: Optional[str]) -> dict[str, str]:
        cleaned = {name: norm_str(value) for name, value in fields.items()}
        missing = [name for name, value in cleaned.items() if not value]
        if missing:
            raise ValidationError(f"{', '.join(missing)} required")
        return cleaned

    async def _current_by_role(self, repo: MembershipRepository, project_id: str) -> dict[str, dict]:
        return index_by_role(await repo.list_by_project(project_id))

    # -----------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------

    async def get_state(self, project_id: str) -> dict[str, Optional[str]]:
        """Occupant of every catalog role; empty slots are None."""
        pid = self._require(projectId=project_id)["projectId"]
        async with unit_of_work(self.session_factory) as session:
            current = await self._current_by_role(MembershipRepository(session), pid)
        return {
            role: (current[role]["user_id"] if role in current else None)
            for role in self.catalog
        }

    async def list_assignments(self, project_id: str) -> list[dict]:
        pid = self._require(projectId=project_id)["projectId"]
        async with unit_of_work(self.session_factory) as session:
            return await MembershipRepository(session).list_by_project(pid)

    # -----------------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------------

    async def set_state(
        self, project_id: str, desired: Mapping[str, Optional[str]]
    ) -> ReconciliationResult:
        """Apply a full snapshot atomically."""
        pid = self._require(projectId=project_id)["projectId"]
        target = normalize_snapshot(self.catalog, desired)

        async with unit_of_work(self.session_factory) as session:
            repo = MembershipRepository(session)
            current = await self._current_by_role(repo, pid)
            ops = _plan_slots(self.catalog, current, target)
            for op in ops:
                if op.action == "delete":
                    await repo.delete_for_role(pid, op.role)
                else:
                    await repo.create(pid, op.user_id, op.role)

        result = ReconciliationResult(project_id=pid, operations=ops)
        log.info(
            "role_state.reconciled",
            project_id=pid,
            created=result.created,
            deleted=result.deleted,
        )
        return result

    async def assign_one(self, project_id: str, user_id: str, role: str) -> dict:
        """Seat one user in one slot, replacing whoever held it."""
        fields = self._require(projectId=project_id, userId=user_id, role=role)
        pid, uid, role = fields["projectId"], fields["userId"], fields["role"]
        if not self.catalog.is_valid(role):
            raise ValidationError(f"Unknown role {role!r}")

        async with unit_of_work(self.session_factory) as session:
            if not await project_exists(session, pid):
                raise ForeignKeyError("Project", pid)
            if not await user_exists(session, uid):
                raise ForeignKeyError("User", uid)
            repo = MembershipRepository(session)
            await repo.delete_for_role(pid, role)
            return await repo.create(pid, uid, role)

    async def remove_one(self, assignment_id: str) -> None:
        aid = self._require(id=assignment_id)["id"]
        async with unit_of_work(self.session_factory) as session:
            await MembershipRepository(session).delete_by_id(aid)
