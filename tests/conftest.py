"""Root conftest — shared test configuration.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so readiness probes hit the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (row locks and PostgreSQL-specific features are not exercised here)
    - bcrypt rounds lowered via env so hashing stays fast
"""

import os

# Ensure tests never pick up deployment secrets or databases
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-hr-leave-tests-000")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from hr_leave.config import get_settings  # noqa: E402
from hr_leave.core.domain_types import Role  # noqa: E402
from hr_leave.db.base import Base  # noqa: E402
from hr_leave.infrastructure.database import get_db, DatabaseSessionManager  # noqa: E402
from hr_leave.infrastructure.security import (  # noqa: E402
    PasswordHasher, build_token_manager,
)
from hr_leave.models.employee import Employee  # noqa: E402
import hr_leave.infrastructure.database as db_module  # noqa: E402
from hr_leave.main import app  # noqa: E402

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return build_token_manager(get_settings())


@pytest.fixture
def make_employee(test_db, hasher):
    """Factory: insert an employee directly, bypassing the service."""
    async def _make(
        name: str = "Alice Worker",
        email: str = "alice@acme.com",
        role: Role | None = Role.EMPLOYEE,
        password: str = DEFAULT_PASSWORD,
    ) -> Employee:
        employee = Employee(
            name=name, email=email, password=hasher.hash(password), role=role,
        )
        test_db.add(employee)
        await test_db.commit()
        await test_db.refresh(employee)
        return employee
    return _make


@pytest.fixture
async def employee(make_employee):
    return await make_employee()


@pytest.fixture
async def other_employee(make_employee):
    return await make_employee(name="Bob Stranger", email="bob@acme.com")


@pytest.fixture
async def hr_user(make_employee):
    return await make_employee(name="Helen Resources", email="helen@acme.com", role=Role.HR)


@pytest.fixture
async def manager_user(make_employee):
    return await make_employee(name="Mark Manager", email="mark@acme.com", role=Role.MANAGER)


@pytest.fixture
def auth_headers(tokens):
    """Build an Authorization header for an employee."""
    def _headers(employee: Employee) -> dict[str, str]:
        token = tokens.issue(employee.id, employee.email, employee.role)
        return {"Authorization": f"Bearer {token}"}
    return _headers
