"""Leave Request Schemas — create/update bodies and the leave request response.

Invariants:
    - type and status validated against LeaveType / LeaveStatus at the boundary
    - LeaveRequestUpdate is a partial patch: a None field means "not provided"
    - LeaveRequestUpdate rejects unknown fields (employee_id cannot be patched)
    - Date ordering and past-date checks are business rules enforced by the
      service, not here, so every caller gets the same typed error
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hr_leave.core.domain_types import LeaveStatus, LeaveType
from hr_leave.schemas.common import PaginationMetadata
from hr_leave.schemas.employee import EmployeeResponse


class LeaveRequestCreate(BaseModel):
    start_date: datetime
    end_date: datetime
    type: LeaveType
    reason: str | None = Field(None, max_length=2000)


class LeaveRequestUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start_date: datetime | None = None
    end_date: datetime | None = None
    type: LeaveType | None = None
    status: LeaveStatus | None = None
    reason: str | None = Field(None, max_length=2000)

    @property
    def changes_dates(self) -> bool:
        return self.start_date is not None or self.end_date is not None


class LeaveRequestResponse(BaseModel):
    """Leave request with the owner's public profile embedded."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    employee: EmployeeResponse | None = None
    start_date: datetime
    end_date: datetime
    type: LeaveType
    status: LeaveStatus
    reason: str | None = None
    created_at: datetime
    updated_at: datetime


class LeaveRequestListResponse(BaseModel):
    data: list[LeaveRequestResponse]
    pagination: PaginationMetadata
