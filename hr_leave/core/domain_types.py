"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Role, LeaveType, LeaveStatus are closed enums; no raw string matching
    - An employee's role is optional (None = unset); PRIVILEGED_ROLES = {hr, manager}
    - Identity is immutable once extracted from a token
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EmployeeId = NewType("EmployeeId", int)
LeaveRequestId = NewType("LeaveRequestId", int)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Employee roles used by the authorization checks."""
    EMPLOYEE = "employee"
    HR = "hr"
    MANAGER = "manager"


class LeaveType(str, Enum):
    SICK = "sick"
    VACATION = "vacation"
    PERSONAL = "personal"
    OTHER = "other"


class LeaveStatus(str, Enum):
    """Leave request states — maps to DB `status` column."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class LeaveSortField(str, Enum):
    START_DATE = "start_date"
    END_DATE = "end_date"
    CREATED_AT = "created_at"


class EmployeeSortField(str, Enum):
    NAME = "name"
    EMAIL = "email"
    CREATED_AT = "created_at"


PRIVILEGED_ROLES = frozenset({Role.HR, Role.MANAGER})


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as asserted by a verified session token."""
    employee_id: EmployeeId
    email: str
    role: Role | None = None

    @property
    def is_privileged(self) -> bool:
        return self.role in PRIVILEGED_ROLES
