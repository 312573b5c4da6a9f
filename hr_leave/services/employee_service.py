"""Employee Service — directory operations: create, get, paginated search.

Invariants:
    - Email uniqueness checked before insert and again by the unique constraint
    - Passwords are bcrypt-hashed before they reach the repository
    - list() applies the shared pagination defaults (page >= 1, 1 <= size <= 100)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from hr_leave.core.domain_types import EmployeeSortField, SortDirection
from hr_leave.core.errors import EmailExistsError, ResourceNotFoundError
from hr_leave.core.pagination import PageMeta, build_page_meta, normalize_page_params
from hr_leave.infrastructure.security import PasswordHasher
from hr_leave.models.employee import Employee
from hr_leave.repositories.employee_repository import EmployeeRepository
from hr_leave.schemas.employee import EmployeeCreate

logger = logging.getLogger(__name__)


class EmployeeService:
    """Employee directory."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self.repo = EmployeeRepository(db)
        self.hasher = hasher

    async def create(self, payload: EmployeeCreate) -> Employee:
        if await self.repo.find_by_email(payload.email) is not None:
            raise EmailExistsError()

        employee = Employee(
            name=payload.name,
            email=payload.email,
            password=self.hasher.hash(payload.password),
            role=payload.role,
        )
        employee = await self.repo.create(employee)
        logger.info("Employee created", extra={"employee_id": employee.id})
        return employee

    async def get(self, employee_id: int) -> Employee:
        employee = await self.repo.find_by_id(employee_id)
        if employee is None:
            raise ResourceNotFoundError("Employee", employee_id)
        return employee

    async def list_employees(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        sort_by: EmployeeSortField | None = None,
        sort_dir: SortDirection | None = None,
    ) -> tuple[list[Employee], PageMeta]:
        params = normalize_page_params(page, page_size)
        employees, total = await self.repo.find_all(
            params,
            search=search,
            sort_by=sort_by or EmployeeSortField.CREATED_AT,
            sort_dir=sort_dir or SortDirection.DESC,
        )
        return employees, build_page_meta(params, total)
