"""Employee Schemas — request validation and the public employee profile.

Invariants:
    - EmployeeResponse never exposes the password hash
    - name 3-100 chars (stripped), email <= 100 chars, password 6-72 chars
    - role, when given, is one of Role
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from hr_leave.core.domain_types import Role
from hr_leave.schemas.common import PaginationMetadata


class EmployeeCreate(BaseModel):
    """Employee creation — also the body of POST /auth/register."""
    name: str = Field(min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    role: Role | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("name must have at least 3 non-blank characters")
        return v

    @field_validator("email")
    @classmethod
    def check_email_length(cls, v: str) -> str:
        if len(v) > 100:
            raise ValueError("email must be at most 100 characters")
        return v


class EmployeeResponse(BaseModel):
    """Public employee profile."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role | None = None
    created_at: datetime
    updated_at: datetime


class EmployeeListResponse(BaseModel):
    data: list[EmployeeResponse]
    pagination: PaginationMetadata

