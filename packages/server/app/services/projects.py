"""
Project service: record creation, listing and existence checks.
"""

from __future__ import annotations

from typing import Optional

import structlog
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.exceptions import ValidationError
from app.models.project import Project
from pms_shared.schemas.common import ProjectHealth, ProjectStatus
from pms_shared.schemas.projects import ProjectCreate

log = structlog.get_logger()

PROJECT_LIST_LIMIT = 50


def norm_str(value: Optional[str]) -> str:
    return (value or "").strip()


async def project_exists(session: AsyncSession, project_id: str) -> bool:
    return await session.get(Project, project_id) is not None


async def create_project(req: ProjectCreate, session: AsyncSession) -> Project:
    """Create a project. Code is upper-cased and must be unique."""
    code = norm_str(req.code).upper()
    name = norm_str(req.name)
    city = norm_str(req.city)
    stage = norm_str(req.stage)
    status = norm_str(req.status) or ProjectStatus.ONGOING.value
    health = norm_str(req.health) or ProjectHealth.GOOD.value

    if not code or not name or not city or not stage:
        raise ValidationError("code, name, city, stage are required")

    result = await session.execute(select(Project.id).where(Project.code == code))
    if result.first() is not None:
        raise ValidationError(f'Project code "{code}" already exists')

    project = Project(
        code=code,
        name=name,
        city=city,
        stage=stage,
        status=status,
        health=health,
    )
    session.add(project)
    await session.flush()

    log.info("project.created", project_id=project.id, code=code)
    return project


async def list_projects(
    session: AsyncSession, q: Optional[str] = None, limit: int = PROJECT_LIST_LIMIT
) -> list[Project]:
    """Projects ordered by name, optionally filtered on code/name/city."""
    query = norm_str(q)
    stmt = select(Project)
    if query:
        pattern = f"%{query}%"
        stmt = stmt.where(
            or_(
                Project.code.ilike(pattern),
                Project.name.ilike(pattern),
                Project.city.ilike(pattern),
            )
        )
    stmt = stmt.order_by(Project.name.asc()).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())
