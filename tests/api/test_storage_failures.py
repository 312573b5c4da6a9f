"""Storage Failures — a broken database answers 503 DATABASE_ERROR through the real session."""

import pytest

from hr_leave.infrastructure.database import get_db
from hr_leave.main import app
from hr_leave.models.leave_request import LeaveRequest


@pytest.fixture
async def real_session_client(client):
    """Route requests through db_manager.session() instead of the plain test session."""
    app.dependency_overrides.pop(get_db, None)
    return client


async def test_missing_table_returns_503(real_session_client, test_engine, employee, auth_headers):
    async with test_engine.begin() as conn:
        await conn.run_sync(LeaveRequest.__table__.drop)

    res = await real_session_client.get(
        "/api/v1/leave-requests", headers=auth_headers(employee),
    )
    assert res.status_code == 503
    body = res.json()
    assert body["error"]["code"] == "DATABASE_ERROR"
    assert "no such table" not in body["error"]["message"]


async def test_healthy_database_still_serves(real_session_client, employee, auth_headers):
    res = await real_session_client.get(
        f"/api/v1/employees/{employee.id}", headers=auth_headers(employee),
    )
    assert res.status_code == 200
