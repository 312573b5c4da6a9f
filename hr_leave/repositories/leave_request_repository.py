"""Leave Request Repository — persistence gateway for LeaveRequest rows.

Invariants:
    - Soft-deleted requests are invisible to find_by_id, find_all and the overlap query
    - find_by_id always returns the owning employee eagerly loaded and
      refreshes an instance already held by the session
    - has_overlapping_approved() counts approved rows whose closed interval
      intersects [start, end]; pending and rejected rows never count
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_leave.core.domain_types import (
    LeaveSortField, LeaveStatus, LeaveType, SortDirection,
)
from hr_leave.core.pagination import PageParams
from hr_leave.core.timestamps import as_utc, utc_now
from hr_leave.models.leave_request import LeaveRequest

_SORT_COLUMNS = {
    LeaveSortField.START_DATE: LeaveRequest.start_date,
    LeaveSortField.END_DATE: LeaveRequest.end_date,
    LeaveSortField.CREATED_AT: LeaveRequest.created_at,
}


@dataclass(frozen=True)
class LeaveRequestFilters:
    """Conjunctive filters. start_date/end_date are bounds, not overlap."""
    employee_id: int | None = None
    status: LeaveStatus | None = None
    type: LeaveType | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class LeaveRequestRepository:
    """Leave request reads, writes and the approved-overlap query."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, leave_request_id: int) -> LeaveRequest | None:
        result = await self.db.execute(
            select(LeaveRequest)
            .options(selectinload(LeaveRequest.employee))
            .where(LeaveRequest.id == leave_request_id)
            .where(LeaveRequest.deleted_at.is_(None))
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_all(
        self,
        params: PageParams,
        filters: LeaveRequestFilters,
        sort_by: LeaveSortField = LeaveSortField.CREATED_AT,
        sort_dir: SortDirection = SortDirection.DESC,
    ) -> tuple[list[LeaveRequest], int]:
        query = select(LeaveRequest).where(LeaveRequest.deleted_at.is_(None))
        if filters.employee_id is not None:
            query = query.where(LeaveRequest.employee_id == filters.employee_id)
        if filters.status is not None:
            query = query.where(LeaveRequest.status == filters.status)
        if filters.type is not None:
            query = query.where(LeaveRequest.type == filters.type)
        if filters.start_date is not None:
            query = query.where(LeaveRequest.start_date >= as_utc(filters.start_date))
        if filters.end_date is not None:
            query = query.where(LeaveRequest.end_date <= as_utc(filters.end_date))

        total = await self.db.scalar(
            select(func.count()).select_from(query.subquery()),
        )

        column = _SORT_COLUMNS[sort_by]
        ordering = column.asc() if sort_dir == SortDirection.ASC else column.desc()
        result = await self.db.execute(
            query.options(selectinload(LeaveRequest.employee))
            .order_by(ordering, LeaveRequest.id.asc())
            .limit(params.page_size)
            .offset(params.offset),
        )
        return list(result.scalars().all()), total or 0

    async def create(self, leave_request: LeaveRequest) -> LeaveRequest:
        self.db.add(leave_request)
        await self.db.commit()
        return leave_request

    async def update(self, leave_request: LeaveRequest) -> LeaveRequest:
        self.db.add(leave_request)
        await self.db.commit()
        return leave_request

    async def soft_delete(self, leave_request: LeaveRequest) -> None:
        leave_request.deleted_at = utc_now()
        await self.db.commit()

    async def has_overlapping_approved(
        self,
        employee_id: int,
        start_date: datetime,
        end_date: datetime,
        exclude_id: int | None = None,
    ) -> bool:
        query = (
            select(func.count())
            .select_from(LeaveRequest)
            .where(LeaveRequest.employee_id == employee_id)
            .where(LeaveRequest.status == LeaveStatus.APPROVED)
            .where(LeaveRequest.deleted_at.is_(None))
            .where(LeaveRequest.start_date <= as_utc(end_date))
            .where(LeaveRequest.end_date >= as_utc(start_date))
        )
        if exclude_id is not None:
            query = query.where(LeaveRequest.id != exclude_id)
        count = await self.db.scalar(query)
        return bool(count)
