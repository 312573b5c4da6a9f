"""Auth Schemas — login body and the token + profile response."""

from pydantic import BaseModel, EmailStr, Field

from hr_leave.schemas.employee import EmployeeCreate, EmployeeResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(EmployeeCreate):
    """Self-registration — same shape and rules as employee creation."""


class AuthResponse(BaseModel):
    token: str
    user: EmployeeResponse
