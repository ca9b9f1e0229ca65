"""User schemas for the admin data-entry and picker endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class UserCreateRequest(CamelModel):
    """Create a user record. Either email or phone must be supplied."""
    code: str = Field(max_length=50)
    role: str = Field(max_length=100)
    name: str = Field(max_length=200)
    city: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_super_admin: bool = False


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class UserSummary(CamelModel):
    """User as returned by search and create."""
    id: str
    code: str
    name: str
    role: str
    city: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_super_admin: bool = False
    created_at: datetime


class UserBrief(CamelModel):
    """Denormalized user view attached to assignment records."""
    id: str
    name: str
    email: Optional[str] = None
