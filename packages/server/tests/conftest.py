"""
Shared fixtures: a fresh SQLite database per test, seeded records, and an
HTTP client whose session factory points at that database.
"""

import os

os.environ.setdefault("PMS_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PMS_SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("PMS_LOG_LEVEL", "warning")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlmodel import select

from app.core.auth import create_jwt
from app.core.database import (
    build_engine,
    build_session_factory,
    get_session_factory,
    init_db,
    unit_of_work,
)
from app.core.roles import get_role_catalog
from app.main import app
from app.models.membership import ProjectMember
from app.models.project import Project
from app.models.user import User
from app.services.role_assignments import ReconciliationEngine


@pytest.fixture
async def db_engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest.fixture
def catalog():
    return get_role_catalog()


@pytest.fixture
def reconciler(session_factory, catalog):
    return ReconciliationEngine(session_factory, catalog)


async def add_all(factory, *records):
    async with unit_of_work(factory) as session:
        for record in records:
            session.add(record)
    return records


async def members_of(factory, project_id: str) -> list[ProjectMember]:
    async with unit_of_work(factory) as session:
        result = await session.execute(
            select(ProjectMember).where(ProjectMember.project_id == project_id)
        )
        return list(result.scalars().all())


@pytest.fixture
async def project(session_factory):
    p = Project(code="PRJ-001", name="Skyline Towers", city="Pune", stage="Design")
    await add_all(session_factory, p)
    return p


@pytest.fixture
async def other_project(session_factory):
    p = Project(code="PRJ-002", name="Harbour View", city="Mumbai", stage="Execution")
    await add_all(session_factory, p)
    return p


@pytest.fixture
async def users(session_factory):
    """Three ordinary users: u1, u2, u3."""
    records = (
        User(code="U001", name="Asha Rao", role="PMC", email="asha@example.com"),
        User(code="U002", name="Vikram Shah", role="Architect", email="vikram@example.com"),
        User(code="U003", name="Meera Iyer", role="Contractor", phone="9876543210"),
    )
    await add_all(session_factory, *records)
    return list(records)


@pytest.fixture
async def admin_user(session_factory):
    admin = User(
        code="ADMIN", name="Site Admin", role="Admin",
        email="admin@example.com", is_super_admin=True,
    )
    await add_all(session_factory, admin)
    return admin


@pytest.fixture
def admin_headers(admin_user):
    token, _ = create_jwt(admin_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(session_factory):
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
