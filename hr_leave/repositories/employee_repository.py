"""Employee Repository — persistence gateway for Employee rows.

Invariants:
    - Soft-deleted employees are invisible to every lookup
    - create() reports a unique-email violation as EmailExistsError, so the
      uniqueness check holds even when two registrations race
    - lock() takes a row lock (SELECT ... FOR UPDATE); SQLite ignores it
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_leave.core.domain_types import EmployeeSortField, SortDirection
from hr_leave.core.errors import EmailExistsError
from hr_leave.core.pagination import PageParams
from hr_leave.models.employee import Employee

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    EmployeeSortField.NAME: Employee.name,
    EmployeeSortField.EMAIL: Employee.email,
    EmployeeSortField.CREATED_AT: Employee.created_at,
}


class EmployeeRepository:
    """Employee lookups, listing and inserts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, employee_id: int) -> Employee | None:
        result = await self.db.execute(
            select(Employee)
            .where(Employee.id == employee_id)
            .where(Employee.deleted_at.is_(None)),
        )
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Employee | None:
        result = await self.db.execute(
            select(Employee)
            .where(Employee.email == email)
            .where(Employee.deleted_at.is_(None)),
        )
        return result.scalar_one_or_none()

    async def lock(self, employee_id: int) -> None:
        """Serialize writers that check-then-act on this employee's leave."""
        await self.db.execute(
            select(Employee.id)
            .where(Employee.id == employee_id)
            .with_for_update(),
        )

    async def create(self, employee: Employee) -> Employee:
        self.db.add(employee)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("Duplicate email rejected by unique constraint")
            raise EmailExistsError()
        await self.db.refresh(employee)
        return employee

    async def find_all(
        self,
        params: PageParams,
        search: str | None = None,
        sort_by: EmployeeSortField = EmployeeSortField.CREATED_AT,
        sort_dir: SortDirection = SortDirection.DESC,
    ) -> tuple[list[Employee], int]:
        """Page of employees matching `search` in name or email, plus total count."""
        query = select(Employee).where(Employee.deleted_at.is_(None))
        if search:
            # autoescape: % and _ in the search text match literally
            query = query.where(or_(
                Employee.name.icontains(search, autoescape=True),
                Employee.email.icontains(search, autoescape=True),
            ))

        total = await self.db.scalar(
            select(func.count()).select_from(query.subquery()),
        )

        column = _SORT_COLUMNS[sort_by]
        ordering = column.asc() if sort_dir == SortDirection.ASC else column.desc()
        result = await self.db.execute(
            query.order_by(ordering, Employee.id.asc())
            .limit(params.page_size)
            .offset(params.offset),
        )
        return list(result.scalars().all()), total or 0
