from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

if TYPE_CHECKING:
    from organization.models import Organization


class ShiftRotation(Base):
    __tablename__ = "shift_rotations"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), index=True
    )

    rotation_name: Mapped[str] = mapped_column(String(120), nullable=False)
    rotation_frequency: Mapped[str] = mapped_column(String(50), nullable=False)
    replace_existing_shift: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    # ordered shift ids; position drives the round-robin
    shifts_in_sequence: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # relationships
    org: Mapped["Organization"] = relationship("Organization", back_populates="rotations")
