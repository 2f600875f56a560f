from __future__ import annotations
import logging
from datetime import date
from typing import Optional, List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from core.database import commit_or_raise
from core.exceptions import NotFound, Conflict
from .models import EmployeeShiftAssignment
from .schema import AssignmentCreate
from shift.models import Shift

logger = logging.getLogger(__name__)

DUPLICATE_DETAIL = "employee already has a shift assigned on this date"


# LIST (org-scoped)
def get_assignments(
    db: Session,
    *,
    company_id: int,
    employee_id: Optional[int] = None,
    shift_id: Optional[int] = None,
    assigned_date: Optional[date] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[EmployeeShiftAssignment]:
    stmt = select(EmployeeShiftAssignment).where(EmployeeShiftAssignment.company_id == company_id)
    if employee_id is not None:
        stmt = stmt.where(EmployeeShiftAssignment.employee_id == employee_id)
    if shift_id is not None:
        stmt = stmt.where(EmployeeShiftAssignment.shift_id == shift_id)
    if assigned_date is not None:
        stmt = stmt.where(EmployeeShiftAssignment.assigned_date == assigned_date)
    if start_date is not None:
        stmt = stmt.where(EmployeeShiftAssignment.assigned_date >= start_date)
    if end_date is not None:
        stmt = stmt.where(EmployeeShiftAssignment.assigned_date <= end_date)

    stmt = stmt.order_by(EmployeeShiftAssignment.assigned_date, EmployeeShiftAssignment.employee_id)
    return list(db.scalars(stmt))


# Single (org-scoped)
def get_assignment_for_org(db: Session, assignment_id: int, company_id: int) -> EmployeeShiftAssignment | None:
    stmt = select(EmployeeShiftAssignment).where(
        EmployeeShiftAssignment.id == assignment_id,
        EmployeeShiftAssignment.company_id == company_id,
    )
    return db.scalars(stmt).first()


def get_for_employee_date(db: Session, employee_id: int, assigned_date: date) -> EmployeeShiftAssignment | None:
    """Lookup by the conflict key. Not company-scoped: the key is global."""
    stmt = select(EmployeeShiftAssignment).where(
        EmployeeShiftAssignment.employee_id == employee_id,
        EmployeeShiftAssignment.assigned_date == assigned_date,
    )
    return db.scalars(stmt).first()


def count_for_shift(db: Session, shift_id: int) -> int:
    stmt = select(func.count(EmployeeShiftAssignment.id)).where(EmployeeShiftAssignment.shift_id == shift_id)
    return db.scalar(stmt) or 0


def create_assignment(db: Session, dto: AssignmentCreate) -> EmployeeShiftAssignment:
    shift = db.get(Shift, dto.shift_id)
    if not shift or shift.company_id != dto.company_id:
        raise NotFound("shift not found")

    if get_for_employee_date(db, dto.employee_id, dto.assigned_date):
        raise Conflict(DUPLICATE_DETAIL)

    row = EmployeeShiftAssignment(
        company_id=dto.company_id,
        employee_id=dto.employee_id,
        shift_id=dto.shift_id,
        assigned_date=dto.assigned_date,
    )
    db.add(row)
    # a concurrent insert on the same key lands here as a Conflict
    commit_or_raise(db, conflict_detail=DUPLICATE_DETAIL)
    db.refresh(row)
    logger.info("Assigned shift %s to employee %s on %s", row.shift_id, row.employee_id, row.assigned_date)
    return row


def resolve_effective_shift(db: Session, company_id: int, employee_id: int, on_date: date) -> tuple[Shift, str]:
    """
    Shift an employee works on a date: the explicit assignment if there is
    one, otherwise the company's default shift.
    """
    row = get_for_employee_date(db, employee_id, on_date)
    if row and row.company_id == company_id:
        return db.get(Shift, row.shift_id), "assignment"

    default = db.scalars(
        select(Shift).where(Shift.company_id == company_id, Shift.is_default.is_(True))
    ).first()
    if not default:
        raise NotFound("no assignment and no default shift configured")
    return default, "default"
