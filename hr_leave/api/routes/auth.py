"""Auth Routes — public login and registration."""

from fastapi import APIRouter, Depends, status

from hr_leave.api.deps import get_auth_service
from hr_leave.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from hr_leave.schemas.employee import EmployeeResponse
from hr_leave.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest, service: AuthService = Depends(get_auth_service),
):
    token, employee = await service.login(body.email, body.password)
    return AuthResponse(token=token, user=EmployeeResponse.model_validate(employee))


@router.post(
    "/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest, service: AuthService = Depends(get_auth_service),
):
    token, employee = await service.register(body)
    return AuthResponse(token=token, user=EmployeeResponse.model_validate(employee))
