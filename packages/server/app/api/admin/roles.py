"""
Role catalog and per-project role snapshot endpoints.

GET  /admin/roles/catalog               — Ordered role names
GET  /admin/projects/{id}/roles         — Current occupant of every role
POST /admin/projects/{id}/assign-roles  — Reconcile to a full snapshot
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_reconciliation_engine
from app.core.roles import RoleCatalog, get_role_catalog
from app.services.role_assignments import ReconciliationEngine
from pms_shared.schemas.assignments import (
    RoleCatalogResponse,
    RoleSnapshotRequest,
    RoleStateResponse,
)
from pms_shared.schemas.common import OkResponse

router = APIRouter()


@router.get("/roles/catalog", response_model=RoleCatalogResponse)
async def roles_catalog(catalog: RoleCatalog = Depends(get_role_catalog)):
    return RoleCatalogResponse(roles=list(catalog.roles()))


@router.get("/projects/{project_id}/roles", response_model=RoleStateResponse)
async def get_project_roles(
    project_id: str,
    engine: ReconciliationEngine = Depends(get_reconciliation_engine),
):
    """One entry per catalog role; unassigned roles are null."""
    state = await engine.get_state(project_id)
    return RoleStateResponse(assignments=state)


@router.post("/projects/{project_id}/assign-roles", response_model=OkResponse)
async def set_project_roles(
    project_id: str,
    body: RoleSnapshotRequest,
    engine: ReconciliationEngine = Depends(get_reconciliation_engine),
):
    """Replace the project's role occupants with the given snapshot.

    Unknown roles are ignored, omitted roles are cleared. All or nothing.
    """
    await engine.set_state(project_id, body.assignments)
    return OkResponse()
