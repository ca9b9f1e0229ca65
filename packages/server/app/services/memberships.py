"""
Membership repository: persisted role assignments for projects.

Every method works inside the caller's session and flushes immediately, so
a delete issued before a create for the same slot reaches the database first.
The repository does not enforce one occupant per slot; the reconciliation
engine does, with the (project_id, role) unique constraint as a backstop.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.exceptions import ForeignKeyError, NotFoundError
from app.models.membership import ProjectMember
from app.models.user import User
from app.services.projects import project_exists

log = structlog.get_logger()


def _to_record(member: ProjectMember, user: Optional[User]) -> dict:
    return {
        "id": member.id,
        "project_id": member.project_id,
        "user_id": member.user_id,
        "role": member.role,
        "created_at": member.created_at,
        "user": (
            {"id": user.id, "name": user.name, "email": user.email}
            if user is not None
            else None
        ),
    }


def index_by_role(records: Iterable[dict]) -> dict[str, dict]:
    """Map role -> record, keeping only the newest record when a role repeats."""
    index: dict[str, dict] = {}
    for record in records:
        role = record.get("role")
        if not role:
            continue
        kept = index.get(role)
        if kept is None or record["created_at"] > kept["created_at"]:
            index[role] = record
    return index


class MembershipRepository:
    """create / list-by-project / delete-by-id over ``project_members``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, project_id: str, user_id: str, role: str) -> dict:
        if not await project_exists(self.session, project_id):
            raise ForeignKeyError("Project", project_id)
        user = await self.session.get(User, user_id)
        if user is None:
            raise ForeignKeyError("User", user_id)

        member = ProjectMember(project_id=project_id, user_id=user_id, role=role)
        self.session.add(member)
        await self.session.flush()

        log.info(
            "role_assignment.created",
            assignment_id=member.id,
            project_id=project_id,
            user_id=user_id,
            role=role,
        )
        return _to_record(member, user)

    async def list_by_project(self, project_id: str) -> list[dict]:
        """Records for a project, newest first, with the assigned user attached."""
        result = await self.session.execute(
            select(ProjectMember, User)
            .outerjoin(User, User.id == ProjectMember.user_id)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.created_at.desc())
        )
        return [_to_record(member, user) for member, user in result.all()]

    async def delete_by_id(self, assignment_id: str) -> None:
        member = await self.session.get(ProjectMember, assignment_id)
        if member is None:
            raise NotFoundError("Assignment", assignment_id)
        await self.session.delete(member)
        await self.session.flush()
        log.info(
            "role_assignment.deleted",
            assignment_id=assignment_id,
            project_id=member.project_id,
            role=member.role,
        )

    async def delete_for_role(self, project_id: str, role: str) -> int:
        """Clear a slot. Returns the number of records removed."""
        result = await self.session.execute(
            delete(ProjectMember).where(
                ProjectMember.project_id == project_id,
                ProjectMember.role == role,
            )
        )
        removed = result.rowcount or 0
        if removed:
            log.info(
                "role_assignment.slot_cleared",
                project_id=project_id,
                role=role,
                removed=removed,
            )
        return removed

