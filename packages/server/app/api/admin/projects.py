"""
Project data-entry endpoints.

POST /admin/projects      — Create a project
GET  /admin/projects?q=   — List projects (optional search over code/name/city)
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session
from app.services import projects as project_service
from pms_shared.schemas.projects import ProjectCreate, ProjectRead

router = APIRouter()


@router.post("", response_model=ProjectRead, status_code=201)
async def create_project(
    body: ProjectCreate,
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.create_project(body, session)
    return ProjectRead.model_validate(project)


@router.get("", response_model=List[ProjectRead])
async def list_projects(
    q: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
):
    projects = await project_service.list_projects(session, q)
    return [ProjectRead.model_validate(p) for p in projects]
