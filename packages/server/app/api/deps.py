"""Shared FastAPI dependencies for API routers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import get_session_factory
from app.core.roles import RoleCatalog, get_role_catalog
from app.services.role_assignments import ReconciliationEngine


def get_reconciliation_engine(
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    catalog: RoleCatalog = Depends(get_role_catalog),
) -> ReconciliationEngine:
    return ReconciliationEngine(factory, catalog)
