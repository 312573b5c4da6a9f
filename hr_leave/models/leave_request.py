"""LeaveRequest ORM — a dated absence request owned by an employee.

Invariants:
    - Always references an Employee (employee_id FK); never owns it
    - start_date <= end_date (enforced by the service before every write)
    - status starts as pending; changes only through privileged actions
    - deleted_at IS NULL for live rows

Design Decisions:
    - employee relationship loaded with selectin: every response embeds the
      owner's public profile
"""

from datetime import datetime

from sqlalchemy import Integer, Text, DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_leave.core.domain_types import LeaveStatus, LeaveType
from hr_leave.core.timestamps import utc_now
from hr_leave.db.base import Base
from hr_leave.models.employee import enum_values


class LeaveRequest(Base):
    """Leave request entity."""
    __tablename__ = "leave_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id"), nullable=False, index=True,
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    type: Mapped[LeaveType] = mapped_column(
        Enum(LeaveType, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
    )
    status: Mapped[LeaveStatus] = mapped_column(
        Enum(LeaveStatus, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=LeaveStatus.PENDING,
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True,
    )

    employee: Mapped["Employee"] = relationship("Employee", lazy="selectin")
