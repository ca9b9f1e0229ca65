"""
User service: record creation, picker search and existence checks.
"""

from __future__ import annotations

import re
from typing import Optional

import structlog
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.exceptions import ValidationError
from app.models.user import User
from app.services.projects import norm_str
from pms_shared.schemas.users import UserCreateRequest

log = structlog.get_logger()

_NON_DIGITS = re.compile(r"[^\d]")


def norm_email(value: Optional[str]) -> Optional[str]:
    s = norm_str(value)
    return s.lower() if s else None


def norm_phone(value: Optional[str]) -> Optional[str]:
    s = norm_str(value)
    if not s:
        return None
    digits = _NON_DIGITS.sub("", s)
    return digits or None


async def user_exists(session: AsyncSession, user_id: str) -> bool:
    return await session.get(User, user_id) is not None


async def _field_taken(session: AsyncSession, column, value) -> bool:
    result = await session.execute(select(User.id).where(column == value))
    return result.first() is not None


async def create_user(req: UserCreateRequest, session: AsyncSession) -> User:
    """Create a user. Needs a code, role and name plus an email or a phone."""
    code = norm_str(req.code).upper()
    role = norm_str(req.role)
    name = norm_str(req.name)
    city = norm_str(req.city)
    email = norm_email(req.email)
    phone = norm_phone(req.phone)

    if not code or not role or not name:
        raise ValidationError("code, role and name are required")
    if not email and not phone:
        raise ValidationError("Either email or phone is required")

    if await _field_taken(session, User.code, code):
        raise ValidationError(f'User code "{code}" already exists')
    if email and await _field_taken(session, User.email, email):
        raise ValidationError(f'Email "{email}" already in use')
    if phone and await _field_taken(session, User.phone, phone):
        raise ValidationError(f'Phone "{phone}" already in use')

    user = User(
        code=code,
        role=role,
        name=name,
        city=city or None,
        email=email,
        phone=phone,
        is_super_admin=bool(req.is_super_admin),
    )
    session.add(user)
    await session.flush()

    log.info("user.created", user_id=user.id, code=code, is_super_admin=user.is_super_admin)
    return user


async def search_users(
    session: AsyncSession, q: Optional[str], limit: int
) -> list[User]:
    """Picker search. Blank query returns the most recent users."""
    query = norm_str(q)

    if not query:
        result = await session.execute(
            select(User).order_by(User.created_at.desc()).limit(limit)
        )
        return list(result.scalars().all())

    pattern = f"%{query}%"
    result = await session.execute(
        select(User)
        .where(
            or_(
                User.email.ilike(pattern),
                User.name.ilike(pattern),
                User.code.ilike(pattern),
                User.role.ilike(pattern),
                User.phone.ilike(pattern),
            )
        )
        .order_by(User.name.asc())
        .limit(limit)
    )
    return list(result.scalars().all())
