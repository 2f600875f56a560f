from __future__ import annotations
import logging
from datetime import date
from typing import Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.database import commit_or_raise
from core.exceptions import NotFound, InvalidInput, Conflict
from assignment.models import EmployeeShiftAssignment
from assignment.service import get_for_employee_date
from .models import ShiftRotation
from .service import get_rotation_for_org, missing_shift_ids

logger = logging.getLogger(__name__)

# outcomes that count as "processed" for assignments_created
PROCESSED = ("created", "replaced", "unchanged", "skipped")


# ---------- helpers ----------

def shift_for_position(sequence: Sequence[int], index: int) -> int:
    """Round-robin: the i-th employee gets sequence[i mod len]."""
    return sequence[index % len(sequence)]

def _reconcile(
    db: Session,
    existing: EmployeeShiftAssignment,
    *,
    company_id: int,
    shift_id: int,
    replace: bool,
) -> str:
    if existing.company_id != company_id:
        raise Conflict("assignment on this date belongs to another organization")
    if not replace:
        return "skipped"
    if existing.shift_id == shift_id:
        return "unchanged"
    with db.begin_nested():
        existing.shift_id = shift_id
    return "replaced"

def _apply_one(
    db: Session,
    *,
    company_id: int,
    employee_id: int,
    shift_id: int,
    on_date: date,
    replace: bool,
) -> str:
    existing = get_for_employee_date(db, employee_id, on_date)
    if existing is None:
        try:
            with db.begin_nested():
                db.add(EmployeeShiftAssignment(
                    company_id=company_id,
                    employee_id=employee_id,
                    shift_id=shift_id,
                    assigned_date=on_date,
                ))
            return "created"
        except IntegrityError:
            # someone else inserted the same (employee, date) between our read
            # and our write; fall through to update-or-skip on their row
            existing = get_for_employee_date(db, employee_id, on_date)
            if existing is None:
                raise
            logger.info("Assignment for employee %s on %s appeared concurrently", employee_id, on_date)

    return _reconcile(
        db, existing, company_id=company_id, shift_id=shift_id, replace=replace,
    )

def _load_runnable_rotation(db: Session, company_id: int, rotation_id: int) -> ShiftRotation:
    rotation = get_rotation_for_org(db, rotation_id, company_id)
    if not rotation:
        raise NotFound("Rotation not found")
    if not rotation.shifts_in_sequence:
        raise InvalidInput("Rotation has no shifts defined")
    # shifts may have been deleted since the rotation was saved
    missing = missing_shift_ids(db, company_id, rotation.shifts_in_sequence)
    if missing:
        raise InvalidInput(f"rotation references shifts that no longer exist: {missing}")
    return rotation

# ---------- public API ----------

def run_rotation(
    db: Session,
    *,
    company_id: int,
    rotation_id: int,
    employee_ids: Sequence[int],
    assigned_date: date,
    dry_run: bool = False,
    ) -> dict:
    """
    Assign the rotation's shifts to employees for one date.

    - Employees are walked in the given order; employee i gets
      shifts_in_sequence[i % len(shifts_in_sequence)].
    - An existing (employee, date) assignment is overwritten when the rotation
      has replace_existing_shift, otherwise left alone.
    - Each employee runs in its own savepoint: a storage failure is recorded
      as outcome "failed" and the rest of the batch still goes through.
    - assignments_created counts every employee processed without failure.
    - dry_run performs the same writes and rolls them back, so the report
      matches what a real run would do.
    """
    if not employee_ids:
        raise InvalidInput("employee_ids must not be empty")
    rotation = _load_runnable_rotation(db, company_id, rotation_id)
    sequence = list(rotation.shifts_in_sequence)
    replace = bool(rotation.replace_existing_shift)

    counts = {"created": 0, "replaced": 0, "unchanged": 0, "skipped": 0, "failed": 0}
    results: list[dict] = []

    for i, employee_id in enumerate(employee_ids):
        shift_id = shift_for_position(sequence, i)
        error = None
        try:
            outcome = _apply_one(
                db,
                company_id=company_id,
                employee_id=employee_id,
                shift_id=shift_id,
                on_date=assigned_date,
                replace=replace,
            )
        except (SQLAlchemyError, Conflict) as exc:
            outcome = "failed"
            error = str(getattr(exc, "detail", None) or getattr(exc, "orig", None) or exc)
            logger.warning(
                "Rotation %s: employee %s on %s failed: %s", rotation_id, employee_id, assigned_date, error,
            )
        counts[outcome] += 1
        results.append({"employee_id": employee_id, "shift_id": shift_id, "outcome": outcome, "error": error})

    if dry_run:
        db.rollback()
    else:
        commit_or_raise(db, conflict_detail="rotation run conflicted with a concurrent change")

    processed = sum(counts[k] for k in PROCESSED)
    logger.info(
        "Rotation %s run for company %s on %s: %s (dry_run=%s)",
        rotation_id, company_id, assigned_date, counts, dry_run,
    )
    return {
        "assignments_created": processed,
        **counts,
        "assigned_date": assigned_date,
        "dry_run": dry_run,
        "message": f"Shift rotation applied to {processed} employees",
        "results": results,
    }
