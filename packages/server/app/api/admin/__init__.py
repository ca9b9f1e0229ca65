"""
Admin API router.

Every route below /admin passes the super-admin check before its handler runs.
"""

from fastapi import APIRouter, Depends

from app.core.auth import require_admin
from pms_shared.schemas.common import ErrorResponse
from . import assignments, projects, roles, users

ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 403, 404, 422, 503)
}

router = APIRouter(dependencies=[Depends(require_admin)], responses=ERROR_RESPONSES)

router.include_router(roles.router, tags=["Roles"])
router.include_router(assignments.router, prefix="/assignments", tags=["Assignments"])
router.include_router(projects.router, prefix="/projects", tags=["Projects"])
router.include_router(users.router, prefix="/users", tags=["Users"])
