# shift/service.py
from __future__ import annotations
import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from core.database import commit_or_raise
from core.exceptions import NotFound, InvalidInput, InvariantViolation
from organization.service import lock_organization
from assignment.service import count_for_shift
from rotation.models import ShiftRotation
from .models import Shift, Weekday
from .schemas import ShiftCreate, ShiftUpdate

logger = logging.getLogger(__name__)

DEFAULT_CONFLICT = "another shift was made default concurrently, retry"


def _day_names(days) -> list[str]:
    return [d.value if isinstance(d, Weekday) else str(d) for d in days]

def _clear_defaults(db: Session, company_id: int, *, exclude_id: Optional[int] = None) -> None:
    stmt = update(Shift).where(Shift.company_id == company_id, Shift.is_default.is_(True))
    if exclude_id is not None:
        stmt = stmt.where(Shift.id != exclude_id)
    db.execute(stmt.values(is_default=False))

def get_shift(db: Session, shift_id: int) -> Shift | None:
    return db.get(Shift, shift_id)

def get_shift_for_org(db: Session, shift_id: int, company_id: int) -> Optional[Shift]:
    stmt = select(Shift).where(Shift.id == shift_id, Shift.company_id == company_id)
    return db.scalars(stmt).first()

def get_shifts(db: Session, *, company_id: int) -> list[Shift]:
    # default first, then alphabetical
    stmt = (
        select(Shift)
        .where(Shift.company_id == company_id)
        .order_by(Shift.is_default.desc(), Shift.shift_name.asc(), Shift.id.asc())
    )
    return list(db.scalars(stmt))

def get_default_shift(db: Session, company_id: int) -> Optional[Shift]:
    stmt = select(Shift).where(Shift.company_id == company_id, Shift.is_default.is_(True))
    return db.scalars(stmt).first()

def create_shift(db: Session, shift: ShiftCreate) -> Shift:
    if shift.start_time == shift.end_time:
        raise InvalidInput("start time and end time cannot be equal")

    # clear-then-insert runs in one transaction under the company lock
    lock_organization(db, shift.company_id)
    if shift.is_default:
        _clear_defaults(db, shift.company_id)

    row = Shift(
        company_id=shift.company_id,
        shift_name=shift.shift_name,
        start_time=shift.start_time,
        end_time=shift.end_time,
        working_days=_day_names(shift.working_days),
        is_default=shift.is_default,
    )
    db.add(row)
    commit_or_raise(db, conflict_detail=DEFAULT_CONFLICT)
    db.refresh(row)
    logger.info("Created shift %s (%s) for company %s default=%s",
                row.id, row.shift_name, row.company_id, row.is_default)
    return row

def update_shift(db: Session, shift_id: int, company_id: int, patch: ShiftUpdate) -> Shift:
    row = get_shift_for_org(db, shift_id, company_id)
    if not row:
        raise NotFound("Shift not found")

    data = patch.model_dump(exclude_unset=True, exclude_none=True)

    new_start = data.get("start_time", row.start_time)
    new_end = data.get("end_time", row.end_time)
    if new_start == new_end:
        raise InvalidInput("start time and end time cannot be equal")
    if "working_days" in data:
        data["working_days"] = _day_names(data["working_days"])

    if data.get("is_default"):
        # clear the others before touching the row so autoflush never
        # writes a second default
        lock_organization(db, company_id)
        _clear_defaults(db, company_id, exclude_id=row.id)

    for k, v in data.items():
        setattr(row, k, v)

    commit_or_raise(db, conflict_detail=DEFAULT_CONFLICT)
    db.refresh(row)
    return row

def set_default_shift(db: Session, shift_id: int, company_id: int) -> Shift:
    lock_organization(db, company_id)
    row = get_shift_for_org(db, shift_id, company_id)
    if not row:
        db.rollback()
        raise NotFound("Shift not found")

    _clear_defaults(db, company_id)
    row.is_default = True
    commit_or_raise(db, conflict_detail=DEFAULT_CONFLICT)
    db.refresh(row)
    logger.info("Default shift for company %s is now %s", company_id, row.id)
    return row

def count_rotations_using(db: Session, shift_id: int, company_id: int) -> int:
    # sequences are JSON arrays, so filter in Python
    sequences = db.scalars(
        select(ShiftRotation.shifts_in_sequence).where(ShiftRotation.company_id == company_id)
    )
    return sum(1 for seq in sequences if shift_id in (seq or []))

def delete_shift(db: Session, shift_id: int, company_id: int) -> None:
    row = get_shift_for_org(db, shift_id, company_id)
    if not row:
        raise NotFound("Shift not found")

    if row.is_default:
        raise InvariantViolation("Cannot delete the default shift")

    if count_for_shift(db, shift_id) > 0:
        raise InvariantViolation("Cannot delete shift that has employee assignments")

    if count_rotations_using(db, shift_id, company_id) > 0:
        raise InvariantViolation("Cannot delete shift that is part of a shift rotation")

    db.delete(row)
    commit_or_raise(db, conflict_detail="shift is still referenced")
    logger.info("Deleted shift %s for company %s", shift_id, company_id)
