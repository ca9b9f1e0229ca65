"""Role assignment schemas: single-slot records and full role snapshots."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from .common import CamelModel
from .users import UserBrief


class AssignRequest(CamelModel):
    """Put one user into one role slot on a project."""
    project_id: str
    user_id: str
    role: str


class AssignmentRead(CamelModel):
    id: str
    project_id: str
    user_id: str
    role: str
    created_at: datetime
    user: Optional[UserBrief] = None


class RoleSnapshotRequest(CamelModel):
    """Desired occupant for every role slot. Omitted roles are cleared."""
    assignments: Dict[str, Optional[str]]


class RoleStateResponse(CamelModel):
    ok: bool = True
    assignments: Dict[str, Optional[str]]


class RoleCatalogResponse(CamelModel):
    ok: bool = True
    roles: List[str]
