"""
Single-slot assignment endpoints.

POST   /admin/assignments              — Seat a user in a role (replaces occupant)
GET    /admin/assignments?projectId=   — List a project's assignments, newest first
DELETE /admin/assignments?id=          — Remove one assignment
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_reconciliation_engine
from app.services.role_assignments import ReconciliationEngine
from pms_shared.schemas.assignments import AssignmentRead, AssignRequest
from pms_shared.schemas.common import OkResponse

router = APIRouter()


@router.post("", response_model=AssignmentRead, status_code=201)
async def assign(
    body: AssignRequest,
    engine: ReconciliationEngine = Depends(get_reconciliation_engine),
):
    record = await engine.assign_one(body.project_id, body.user_id, body.role)
    return AssignmentRead(**record)


@router.get("", response_model=List[AssignmentRead])
async def list_assignments(
    project_id: str = Query("", alias="projectId"),
    engine: ReconciliationEngine = Depends(get_reconciliation_engine),
):
    records = await engine.list_assignments(project_id)
    return [AssignmentRead(**record) for record in records]


@router.delete("", response_model=OkResponse)
async def remove_assignment(
    assignment_id: str = Query("", alias="id"),
    engine: ReconciliationEngine = Depends(get_reconciliation_engine),
):
    await engine.remove_one(assignment_id)
    return OkResponse()
