"""Employee ORM — identity record referenced by leave requests.

Invariants:
    - email is unique across all rows (including soft-deleted ones)
    - password holds a bcrypt hash, never the plain text
    - role is nullable; when set it is one of Role
    - deleted_at IS NULL for live rows
"""

from datetime import datetime

from sqlalchemy import Integer, String, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column

from hr_leave.core.domain_types import Role
from hr_leave.core.timestamps import utc_now
from hr_leave.db.base import Base


def enum_values(enum_cls) -> list[str]:
    """Persist enum values ("hr"), not member names ("HR")."""
    return [member.value for member in enum_cls]


class Employee(Base):
    """Employee — owns credentials and role."""
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role | None] = mapped_column(
        Enum(Role, native_enum=False, length=20, values_callable=enum_values),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True,
    )
