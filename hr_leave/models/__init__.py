"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from hr_leave.models.employee import Employee  # noqa: F401
from hr_leave.models.leave_request import LeaveRequest  # noqa: F401
