"""API Dependencies — bearer-token identity and per-request service construction.

Invariants:
    - Missing, non-Bearer, malformed, forged or expired tokens → AuthenticationFailedError (401)
    - Services are built per request around the request's DB session
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from hr_leave.config import Settings, get_settings
from hr_leave.core.domain_types import Identity
from hr_leave.core.errors import AuthenticationFailedError
from hr_leave.infrastructure.database import get_db
from hr_leave.infrastructure.security import (
    PasswordHasher, TokenManager, build_password_hasher, build_token_manager,
)
from hr_leave.services.auth_service import AuthService
from hr_leave.services.employee_service import EmployeeService
from hr_leave.services.leave_request_service import LeaveRequestService

bearer_scheme = HTTPBearer(auto_error=False)


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    return build_password_hasher(settings)


def get_token_manager(settings: Settings = Depends(get_settings)) -> TokenManager:
    return build_token_manager(settings)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenManager = Depends(get_token_manager),
) -> Identity:
    """Resolve the caller from the Authorization: Bearer header."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationFailedError("Missing or invalid authorization header")
    return tokens.decode(credentials.credentials)


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenManager = Depends(get_token_manager),
) -> AuthService:
    return AuthService(db, hasher, tokens)


def get_employee_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> EmployeeService:
    return EmployeeService(db, hasher)


def get_leave_request_service(
    db: AsyncSession = Depends(get_db),
) -> LeaveRequestService:
    return LeaveRequestService(db)
