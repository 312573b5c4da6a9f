"""Leave Request Service — lifecycle and authorization engine for leave requests.

Invariants:
    - Create check order: employee exists → start <= end → start not past → no approved overlap
    - Update check order: exists → owner or hr/manager → status only by hr/manager →
      merge → start <= end → (dates patched only) start not past → no approved overlap
    - Approve/Reject are hr-only; Approve re-checks overlap, Reject does not
    - Overlap queries exclude the request's own id and ignore pending/rejected rows
    - Every mutating path locks the owning employee row before the overlap query
    - Every returned LeaveRequest has its employee loaded

Design Decisions:
    - Rules live in core/enforce_leave_rules.py as pure functions; this class
      orchestrates them around repository IO and raises the first violation
    - clock is injectable so past-date checks are deterministic in tests
    - Status changes through update() do not re-check overlap unless dates change,
      and already-decided requests may be approved/rejected again
"""

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from hr_leave.core.domain_types import (
    LeaveSortField, LeaveStatus, Role, SortDirection,
)
from hr_leave.core.enforce_leave_rules import (
    check_can_decide,
    check_can_modify,
    check_date_range,
    check_no_overlap,
    check_not_in_past,
    validate_new_leave_dates,
    validate_update_permission,
)
from hr_leave.core.errors import HRLeaveError, ResourceNotFoundError
from hr_leave.core.pagination import PageMeta, build_page_meta, normalize_page_params
from hr_leave.core.timestamps import as_utc, utc_now
from hr_leave.models.leave_request import LeaveRequest
from hr_leave.repositories.employee_repository import EmployeeRepository
from hr_leave.repositories.leave_request_repository import (
    LeaveRequestFilters, LeaveRequestRepository,
)
from hr_leave.schemas.leave_request import LeaveRequestCreate, LeaveRequestUpdate

logger = logging.getLogger(__name__)


def _raise_if(error: HRLeaveError | None) -> None:
    if error is not None:
        raise error


class LeaveRequestService:
    """Create, read, update, decide and soft-delete leave requests."""

    def __init__(
        self, db: AsyncSession, clock: Callable[[], datetime] = utc_now,
    ):
        self.repo = LeaveRequestRepository(db)
        self.employees = EmployeeRepository(db)
        self.clock = clock

    async def create(
        self, employee_id: int, payload: LeaveRequestCreate,
    ) -> LeaveRequest:
        """Submit a new pending leave request for `employee_id`."""
        if await self.employees.find_by_id(employee_id) is None:
            raise ResourceNotFoundError("Employee", employee_id)

        start_date = as_utc(payload.start_date)
        end_date = as_utc(payload.end_date)
        _raise_if(validate_new_leave_dates(start_date, end_date, self.clock()))
        await self._ensure_no_approved_overlap(employee_id, start_date, end_date)

        leave_request = await self.repo.create(LeaveRequest(
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            type=payload.type,
            status=LeaveStatus.PENDING,
            reason=payload.reason,
        ))
        logger.info(
            "Leave request created",
            extra={"leave_request_id": leave_request.id, "employee_id": employee_id},
        )
        return await self.get(leave_request.id)

    async def get(self, leave_request_id: int) -> LeaveRequest:
        leave_request = await self.repo.find_by_id(leave_request_id)
        if leave_request is None:
            raise ResourceNotFoundError("Leave request", leave_request_id)
        return leave_request

    async def list_leave_requests(
        self,
        filters: LeaveRequestFilters | None = None,
        page: int | None = None,
        page_size: int | None = None,
        sort_by: LeaveSortField | None = None,
        sort_dir: SortDirection | None = None,
    ) -> tuple[list[LeaveRequest], PageMeta]:
        params = normalize_page_params(page, page_size)
        leave_requests, total = await self.repo.find_all(
            params,
            filters or LeaveRequestFilters(),
            sort_by=sort_by or LeaveSortField.CREATED_AT,
            sort_dir=sort_dir or SortDirection.DESC,
        )
        return leave_requests, build_page_meta(params, total)

    async def update(
        self,
        leave_request_id: int,
        requester_id: int,
        requester_role: Role | None,
        patch: LeaveRequestUpdate,
    ) -> LeaveRequest:
        """Partially update a leave request. Unset patch fields keep their value."""
        leave_request = await self.get(leave_request_id)
        _raise_if(validate_update_permission(
            leave_request.employee_id, requester_id, requester_role,
            status_requested=patch.status is not None,
        ))

        start_date = as_utc(patch.start_date or leave_request.start_date)
        end_date = as_utc(patch.end_date or leave_request.end_date)
        _raise_if(check_date_range(start_date, end_date))
        if patch.changes_dates:
            _raise_if(check_not_in_past(start_date, self.clock()))
            await self._ensure_no_approved_overlap(
                leave_request.employee_id, start_date, end_date,
                exclude_id=leave_request.id,
            )

        leave_request.start_date = start_date
        leave_request.end_date = end_date
        if patch.type is not None:
            leave_request.type = patch.type
        if patch.status is not None:
            leave_request.status = patch.status
        if patch.reason is not None:
            leave_request.reason = patch.reason

        await self.repo.update(leave_request)
        logger.info(
            "Leave request updated",
            extra={"leave_request_id": leave_request_id, "employee_id": requester_id},
        )
        return await self.get(leave_request_id)

    async def approve(
        self, leave_request_id: int, requester_role: Role | None,
    ) -> LeaveRequest:
        leave_request = await self.get(leave_request_id)
        _raise_if(check_can_decide(requester_role, "approve"))
        await self._ensure_no_approved_overlap(
            leave_request.employee_id,
            leave_request.start_date,
            leave_request.end_date,
            exclude_id=leave_request.id,
        )
        return await self._set_status(leave_request, LeaveStatus.APPROVED)

    async def reject(
        self, leave_request_id: int, requester_role: Role | None,
    ) -> LeaveRequest:
        leave_request = await self.get(leave_request_id)
        _raise_if(check_can_decide(requester_role, "reject"))
        return await self._set_status(leave_request, LeaveStatus.REJECTED)

    async def delete(
        self,
        leave_request_id: int,
        requester_id: int,
        requester_role: Role | None,
    ) -> None:
        """Soft delete; the row stays but disappears from every query."""
        leave_request = await self.get(leave_request_id)
        _raise_if(check_can_modify(
            leave_request.employee_id, requester_id, requester_role, "delete",
        ))
        await self.repo.soft_delete(leave_request)
        logger.info(
            "Leave request deleted",
            extra={"leave_request_id": leave_request_id, "employee_id": requester_id},
        )

    async def _ensure_no_approved_overlap(
        self,
        employee_id: int,
        start_date: datetime,
        end_date: datetime,
        exclude_id: int | None = None,
    ) -> None:
        await self.employees.lock(employee_id)
        has_overlap = await self.repo.has_overlapping_approved(
            employee_id, start_date, end_date, exclude_id=exclude_id,
        )
        _raise_if(check_no_overlap(has_overlap))

    async def _set_status(
        self, leave_request: LeaveRequest, status: LeaveStatus,
    ) -> LeaveRequest:
        leave_request.status = status
        await self.repo.update(leave_request)
        logger.info(
            f"Leave request {status.value}",
            extra={"leave_request_id": leave_request.id, "status": status.value},
        )
        return await self.get(leave_request.id)
