"""
User endpoints for the admin screens and the role picker.

POST /admin/users      — Create a user
GET  /admin/users?q=   — Search users (name, email, code, role, phone)
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_session
from app.services import users as user_service
from pms_shared.schemas.users import UserCreateRequest, UserSummary

router = APIRouter()


@router.post("", response_model=UserSummary, status_code=201)
async def create_user(
    body: UserCreateRequest,
    session: AsyncSession = Depends(get_session),
):
    user = await user_service.create_user(body, session)
    return UserSummary.model_validate(user)


@router.get("", response_model=List[UserSummary])
async def search_users(
    q: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
):
    """Blank query returns the most recent users."""
    users = await user_service.search_users(session, q, get_settings().user_search_limit)
    return [UserSummary.model_validate(u) for u in users]
