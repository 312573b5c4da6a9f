"""Leave Rule Enforcement — validates leave request mutations before persistence.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return an HRLeaveError on violation, None on success; callers raise it
    - Ownership is checked before role-gated status permission: a stranger
      gets Unauthorized before the status check runs
    - Approve/Reject are hr-only; Update status changes accept hr or manager

Design Decisions:
    - Overlap detection against stored requests is a repository query
      (inclusive of endpoints); this module only turns its result into a verdict
    - validate_* helpers chain checks with `or`: first error wins
"""

from datetime import datetime

from hr_leave.core.domain_types import PRIVILEGED_ROLES, Role
from hr_leave.core.errors import (
    ForbiddenError,
    HRLeaveError,
    InvalidDateRangeError,
    OverlapConflictError,
    PastDateError,
    UnauthorizedError,
)
from hr_leave.core.timestamps import as_utc


def check_date_range(start_date: datetime, end_date: datetime) -> HRLeaveError | None:
    if as_utc(start_date) > as_utc(end_date):
        return InvalidDateRangeError()
    return None


def check_not_in_past(start_date: datetime, now: datetime) -> HRLeaveError | None:
    """Only the start date is compared against the current time."""
    if as_utc(start_date) < as_utc(now):
        return PastDateError()
    return None


def check_no_overlap(has_overlap: bool) -> HRLeaveError | None:
    if has_overlap:
        return OverlapConflictError()
    return None


def is_owner_or_privileged(
    owner_id: int, requester_id: int, requester_role: Role | None,
) -> bool:
    return owner_id == requester_id or requester_role in PRIVILEGED_ROLES


def check_can_modify(
    owner_id: int, requester_id: int, requester_role: Role | None, action: str,
) -> HRLeaveError | None:
    """Owner or hr/manager may update or delete a leave request."""
    if not is_owner_or_privileged(owner_id, requester_id, requester_role):
        return UnauthorizedError(action)
    return None


def check_can_change_status(
    status_requested: bool, requester_role: Role | None,
) -> HRLeaveError | None:
    if status_requested and requester_role not in PRIVILEGED_ROLES:
        return ForbiddenError("only HR or manager can update leave request status")
    return None


def check_can_decide(requester_role: Role | None, verb: str) -> HRLeaveError | None:
    """Approve and Reject are reserved for HR."""
    if requester_role != Role.HR:
        return ForbiddenError(f"only HR can {verb} leave requests")
    return None


def validate_new_leave_dates(
    start_date: datetime, end_date: datetime, now: datetime,
) -> HRLeaveError | None:
    """Range first, then past-date. Returns first error or None."""
    return (
        check_date_range(start_date, end_date)
        or check_not_in_past(start_date, now)
    )


def validate_update_permission(
    owner_id: int,
    requester_id: int,
    requester_role: Role | None,
    status_requested: bool,
) -> HRLeaveError | None:
    """Ownership, then status permission. Returns first error or None."""
    return (
        check_can_modify(owner_id, requester_id, requester_role, "update")
        or check_can_change_status(status_requested, requester_role)
    )
