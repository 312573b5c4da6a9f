"""Leave Request Routes — lifecycle endpoints over HTTP.

Tests cover:
    - every route requires a bearer token
    - create is on behalf of the caller; range/past/overlap map to 400/400/409
    - update/delete authorization: 403 UNAUTHORIZED vs 403 FORBIDDEN
    - approve/reject are hr-only
    - list filters (status/type aliases) and the success envelope
"""

from datetime import datetime, timedelta, timezone

import pytest


def _iso(days: float) -> str:
    """Helper: ISO-8601 UTC timestamp n days from now."""
    moment = datetime.now(timezone.utc) + timedelta(days=days)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def _body(start: float = 5, end: float = 7, leave_type: str = "vacation", **extra):
    return {"start_date": _iso(start), "end_date": _iso(end), "type": leave_type, **extra}


@pytest.fixture
def create_leave(client, auth_headers):
    """Factory: create a leave request through the API as `owner`."""
    async def _create(owner, start: float = 5, end: float = 7, **extra) -> dict:
        res = await client.post(
            "/api/v1/leave-requests", json=_body(start, end, **extra),
            headers=auth_headers(owner),
        )
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return _create


# ─── auth ────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/api/v1/leave-requests"),
        ("post", "/api/v1/leave-requests"),
        ("get", "/api/v1/leave-requests/1"),
        ("put", "/api/v1/leave-requests/1"),
        ("delete", "/api/v1/leave-requests/1"),
        ("post", "/api/v1/leave-requests/1/approve"),
        ("post", "/api/v1/leave-requests/1/reject"),
    ],
)
async def test_routes_require_token(client, method, path):
    res = await client.request(method, path)
    assert res.status_code == 401


# ─── create ──────────────────────────────────────────────────────

async def test_create_returns_pending_request_with_employee(client, employee, auth_headers):
    res = await client.post(
        "/api/v1/leave-requests", json=_body(reason="Holiday"), headers=auth_headers(employee),
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Leave request created successfully"
    assert body["data"]["status"] == "pending"
    assert body["data"]["employee_id"] == employee.id
    assert body["data"]["employee"]["email"] == "alice@acme.com"
    assert "password" not in body["data"]["employee"]


async def test_create_ignores_employee_id_in_body(
    client, employee, other_employee, auth_headers,
):
    res = await client.post(
        "/api/v1/leave-requests",
        json=_body(employee_id=other_employee.id),
        headers=auth_headers(employee),
    )
    assert res.status_code == 201
    assert res.json()["data"]["employee_id"] == employee.id


async def test_create_start_after_end_returns_400(client, employee, auth_headers):
    res = await client.post(
        "/api/v1/leave-requests", json=_body(7, 5), headers=auth_headers(employee),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_DATE_RANGE"


async def test_create_in_past_returns_400(client, employee, auth_headers):
    res = await client.post(
        "/api/v1/leave-requests", json=_body(-3, 2), headers=auth_headers(employee),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "PAST_DATE"


async def test_create_invalid_type_returns_400(client, employee, auth_headers):
    res = await client.post(
        "/api/v1/leave-requests", json=_body(leave_type="sabbatical"),
        headers=auth_headers(employee),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_overlapping_approved_returns_409(
    client, employee, hr_user, auth_headers, create_leave,
):
    """Approved 10-15, then 12-18 → 409; 16-18 → 201."""
    first = await create_leave(employee, 10, 15)
    approve = await client.post(
        f"/api/v1/leave-requests/{first['id']}/approve", headers=auth_headers(hr_user),
    )
    assert approve.status_code == 200

    res = await client.post(
        "/api/v1/leave-requests", json=_body(12, 18), headers=auth_headers(employee),
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "OVERLAP_CONFLICT"

    res = await client.post(
        "/api/v1/leave-requests", json=_body(16, 18), headers=auth_headers(employee),
    )
    assert res.status_code == 201


# ─── get / list ──────────────────────────────────────────────────

async def test_get_leave_request(client, employee, other_employee, auth_headers, create_leave):
    created = await create_leave(employee)
    res = await client.get(
        f"/api/v1/leave-requests/{created['id']}", headers=auth_headers(other_employee),
    )
    assert res.status_code == 200
    assert res.json()["data"]["id"] == created["id"]


async def test_get_missing_leave_request_returns_404(client, employee, auth_headers):
    res = await client.get("/api/v1/leave-requests/999", headers=auth_headers(employee))
    assert res.status_code == 404


async def test_list_filters_by_status_and_type(
    client, employee, hr_user, auth_headers, create_leave,
):
    sick = await create_leave(employee, 5, 6, leave_type="sick")
    await create_leave(employee, 8, 9, leave_type="personal")
    await client.post(
        f"/api/v1/leave-requests/{sick['id']}/reject", headers=auth_headers(hr_user),
    )

    res = await client.get(
        "/api/v1/leave-requests",
        params={"status": "rejected", "type": "sick"},
        headers=auth_headers(employee),
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert [lr["id"] for lr in data["data"]] == [sick["id"]]
    assert data["pagination"]["total_items"] == 1


async def test_list_filters_by_employee(
    client, employee, other_employee, auth_headers, create_leave,
):
    mine = await create_leave(employee)
    await create_leave(other_employee)
    res = await client.get(
        "/api/v1/leave-requests", params={"employee_id": employee.id},
        headers=auth_headers(employee),
    )
    assert [lr["id"] for lr in res.json()["data"]["data"]] == [mine["id"]]


async def test_list_rejects_unknown_status(client, employee, auth_headers):
    res = await client.get(
        "/api/v1/leave-requests", params={"status": "archived"},
        headers=auth_headers(employee),
    )
    assert res.status_code == 400


# ─── update ──────────────────────────────────────────────────────

async def test_owner_updates_reason(client, employee, auth_headers, create_leave):
    created = await create_leave(employee)
    res = await client.put(
        f"/api/v1/leave-requests/{created['id']}",
        json={"reason": "Changed plans"},
        headers=auth_headers(employee),
    )
    assert res.status_code == 200
    assert res.json()["data"]["reason"] == "Changed plans"
    assert res.json()["message"] == "Leave request updated successfully"


async def test_stranger_setting_status_gets_unauthorized(
    client, employee, other_employee, auth_headers, create_leave,
):
    created = await create_leave(employee)
    res = await client.put(
        f"/api/v1/leave-requests/{created['id']}",
        json={"status": "approved"},
        headers=auth_headers(other_employee),
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_owner_setting_status_gets_forbidden(
    client, employee, auth_headers, create_leave,
):
    created = await create_leave(employee)
    res = await client.put(
        f"/api/v1/leave-requests/{created['id']}",
        json={"status": "approved"},
        headers=auth_headers(employee),
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"


async def test_update_rejects_unknown_fields(client, employee, auth_headers, create_leave):
    created = await create_leave(employee)
    res = await client.put(
        f"/api/v1/leave-requests/{created['id']}",
        json={"employee_id": 42},
        headers=auth_headers(employee),
    )
    assert res.status_code == 400


# ─── approve / reject ────────────────────────────────────────────

async def test_hr_approves(client, employee, hr_user, auth_headers, create_leave):
    created = await create_leave(employee)
    res = await client.post(
        f"/api/v1/leave-requests/{created['id']}/approve", headers=auth_headers(hr_user),
    )
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "approved"
    assert res.json()["message"] == "Leave request approved successfully"


async def test_manager_cannot_approve(client, employee, manager_user, auth_headers, create_leave):
    created = await create_leave(employee)
    res = await client.post(
        f"/api/v1/leave-requests/{created['id']}/approve", headers=auth_headers(manager_user),
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"


async def test_employee_cannot_reject(client, employee, auth_headers, create_leave):
    created = await create_leave(employee)
    res = await client.post(
        f"/api/v1/leave-requests/{created['id']}/reject", headers=auth_headers(employee),
    )
    assert res.status_code == 403


async def test_hr_rejects(client, employee, hr_user, auth_headers, create_leave):
    created = await create_leave(employee)
    res = await client.post(
        f"/api/v1/leave-requests/{created['id']}/reject", headers=auth_headers(hr_user),
    )
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "rejected"


# ─── delete ──────────────────────────────────────────────────────

async def test_owner_deletes_then_get_returns_404(client, employee, auth_headers, create_leave):
    created = await create_leave(employee)
    res = await client.delete(
        f"/api/v1/leave-requests/{created['id']}", headers=auth_headers(employee),
    )
    assert res.status_code == 200
    assert res.json() == {
        "success": True, "message": "Leave request deleted successfully", "data": None,
    }

    res = await client.get(
        f"/api/v1/leave-requests/{created['id']}", headers=auth_headers(employee),
    )
    assert res.status_code == 404


async def test_stranger_cannot_delete(
    client, employee, other_employee, auth_headers, create_leave,
):
    created = await create_leave(employee)
    res = await client.delete(
        f"/api/v1/leave-requests/{created['id']}", headers=auth_headers(other_employee),
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "UNAUTHORIZED"
