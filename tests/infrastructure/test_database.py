"""Database Session Manager — storage errors surface as DatabaseError.

Tests cover:
    - a failing statement inside session() raises DatabaseError and rolls back
    - to_database_error picks the most specific operation label
    - HRLeaveError raised inside a session passes through unchanged
    - health_check reports True on a live engine
"""

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import DBAPIError, IntegrityError, InvalidRequestError, OperationalError

from hr_leave.core.errors import DatabaseError, ResourceNotFoundError
from hr_leave.infrastructure.database import DatabaseSessionManager, to_database_error
from hr_leave.models.employee import Employee


@pytest.fixture
def manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


async def test_failing_statement_becomes_database_error(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
    assert exc_info.value.operation == "execute"
    assert exc_info.value.http_status == 503
    assert isinstance(exc_info.value.__cause__, OperationalError)


async def test_failed_write_is_rolled_back(manager):
    with pytest.raises(DatabaseError):
        async with manager.session() as db:
            db.add(Employee(name="Rolled Back", email="rb@acme.com", password="x"))
            await db.flush()
            await db.execute(text("SELECT * FROM no_such_table"))

    async with manager.session() as db:
        found = await db.scalar(select(Employee).where(Employee.email == "rb@acme.com"))
    assert found is None


async def test_domain_errors_pass_through(manager):
    with pytest.raises(ResourceNotFoundError):
        async with manager.session():
            raise ResourceNotFoundError("Employee", 1)


@pytest.mark.parametrize(
    ("exc", "operation"),
    [
        (OperationalError("SELECT 1", {}, Exception("gone")), "execute"),
        (IntegrityError("INSERT", {}, Exception("dup")), "query"),
        (DBAPIError("SELECT 1", {}, Exception("driver")), "query"),
        (InvalidRequestError("bad state"), "unknown"),
    ],
)
def test_to_database_error_labels_operation(exc, operation):
    error = to_database_error(exc)
    assert error.operation == operation
    assert error.code == "DATABASE_ERROR"


async def test_health_check_on_live_engine(manager):
    assert await manager.health_check() is True
