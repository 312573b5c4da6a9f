"""Auth Service — login and self-registration, both answering with a session token.

Invariants:
    - login() fails with the same InvalidCredentialsError whether the email is
      unknown or the password is wrong
    - register() never creates a second employee for an existing email
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from hr_leave.core.errors import InvalidCredentialsError
from hr_leave.infrastructure.security import PasswordHasher, TokenManager
from hr_leave.models.employee import Employee
from hr_leave.repositories.employee_repository import EmployeeRepository
from hr_leave.schemas.auth import RegisterRequest
from hr_leave.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks and token issuance."""

    def __init__(
        self, db: AsyncSession, hasher: PasswordHasher, tokens: TokenManager,
    ):
        self.repo = EmployeeRepository(db)
        self.employees = EmployeeService(db, hasher)
        self.hasher = hasher
        self.tokens = tokens

    async def login(self, email: str, password: str) -> tuple[str, Employee]:
        employee = await self.repo.find_by_email(email)
        if employee is None or not self.hasher.verify(password, employee.password):
            logger.warning("Login rejected")
            raise InvalidCredentialsError()
        return self._issue(employee), employee

    async def register(self, payload: RegisterRequest) -> tuple[str, Employee]:
        employee = await self.employees.create(payload)
        return self._issue(employee), employee

    def _issue(self, employee: Employee) -> str:
        return self.tokens.issue(employee.id, employee.email, employee.role)
