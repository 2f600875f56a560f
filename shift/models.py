from __future__ import annotations
from datetime import datetime, time
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON, Boolean, CheckConstraint, DateTime, ForeignKey, Index, String, Time, false, func, text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

if TYPE_CHECKING:
    from organization.models import Organization


class Weekday(str, Enum):
    monday = "Monday"
    tuesday = "Tuesday"
    wednesday = "Wednesday"
    thursday = "Thursday"
    friday = "Friday"
    saturday = "Saturday"
    sunday = "Sunday"


class Shift(Base):
    __tablename__ = "shifts"

    id: Mapped[int] = mapped_column(primary_key=True)

    company_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), index=True
    )

    shift_name: Mapped[str] = mapped_column(String(120), nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    # weekday names, e.g. ["Monday", "Tuesday"]
    working_days: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    is_default: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # relationships
    org: Mapped["Organization"] = relationship("Organization", back_populates="shifts")

    __table_args__ = (
        CheckConstraint("start_time <> end_time", name="ck_shifts_nonzero"),
        # at most one default shift per company
        Index(
            "uq_shifts_company_default",
            "company_id",
            unique=True,
            sqlite_where=text("is_default = 1"),
            postgresql_where=text("is_default"),
        ),
    )
