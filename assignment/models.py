from __future__ import annotations
from datetime import date, datetime
from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

class EmployeeShiftAssignment(Base):
    __tablename__ = "employee_shift_assignments"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), index=True
    )
    # employees live in the HR core; only the identifier is kept here
    employee_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    shift_id: Mapped[int] = mapped_column(
        ForeignKey("shifts.id", ondelete="RESTRICT"), index=True
    )
    assigned_date: Mapped[date] = mapped_column(Date, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=func.now()
    )

    # relationships
    shift = relationship("Shift")

    __table_args__ = (
        # conflict key: one shift per employee per day
        UniqueConstraint("employee_id", "assigned_date", name="uq_shift_assignment_employee_date"),
        Index("ix_shift_assignments_company_date", "company_id", "assigned_date"),
    )
