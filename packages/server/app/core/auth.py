"""
Authentication and authorization for the admin API.

- Bearer JWT identifying a user (``sub`` = user id)
- One capability check, ``require_admin``, applied at the /admin router
  boundary; handlers and services never look at identity themselves
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog
from fastapi import Depends, HTTPException, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_session
from app.models.user import User

log = structlog.get_logger()
settings = get_settings()

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------

def create_jwt(
    user_id: str,
    *,
    expires_delta: timedelta | None = None,
) -> tuple[str, str]:
    """Create a signed JWT. Returns (token, jti)."""
    jti = str(uuid.uuid4())
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": exp,
        "jti": jti,
    }
    token = jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)
    return token, jti


def decode_jwt(token: str) -> dict:
    """Decode and verify a JWT. Raises jwt.PyJWTError on failure."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])


# ---------------------------------------------------------------------------
# Authentication dependencies
# ---------------------------------------------------------------------------

class AuthenticatedUser:
    """Container for the caller behind a request."""

    def __init__(self, user: User):
        self.user = user
        self.user_id = user.id
        self.is_admin = bool(user.is_super_admin)


async def get_authenticated_user(
    request: Request,
    authorization: Optional[str] = Depends(api_key_header),
    session: AsyncSession = Depends(get_session),
) -> AuthenticatedUser:
    """Resolve the bearer token to a user."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401, detail="Authentication required", headers=_BEARER_CHALLENGE
        )

    token = authorization[7:].strip()
    try:
        payload = decode_jwt(token)
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=401, detail="Invalid or expired token", headers=_BEARER_CHALLENGE
        )

    user_id = payload.get("sub")
    user = await session.get(User, user_id) if user_id else None
    if user is None:
        raise HTTPException(status_code=401, detail="User not found", headers=_BEARER_CHALLENGE)

    auth_user = AuthenticatedUser(user)
    request.state.auth = auth_user
    return auth_user


# ---------------------------------------------------------------------------
# Authorization dependencies
# ---------------------------------------------------------------------------

async def require_admin(
    auth: AuthenticatedUser = Depends(get_authenticated_user),
) -> AuthenticatedUser:
    """Requires a super-admin caller."""
    if not auth.is_admin:
        log.warning("auth.forbidden", user_id=auth.user_id)
        raise HTTPException(status_code=403, detail="Administrator access required")
    return auth
