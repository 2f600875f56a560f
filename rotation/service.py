from __future__ import annotations
import logging
from typing import Optional, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.database import commit_or_raise
from core.exceptions import NotFound, InvalidInput
from .models import ShiftRotation
from .schema import RotationCreate
from shift.models import Shift
from organization.service import get_organization

logger = logging.getLogger(__name__)


def get_rotations(db: Session, *, company_id: int) -> list[ShiftRotation]:
    # newest first
    stmt = (
        select(ShiftRotation)
        .where(ShiftRotation.company_id == company_id)
        .order_by(ShiftRotation.created_at.desc(), ShiftRotation.id.desc())
    )
    return list(db.scalars(stmt))

def get_rotation_for_org(db: Session, rotation_id: int, company_id: int) -> Optional[ShiftRotation]:
    stmt = select(ShiftRotation).where(
        ShiftRotation.id == rotation_id, ShiftRotation.company_id == company_id
    )
    return db.scalars(stmt).first()

def missing_shift_ids(db: Session, company_id: int, shift_ids: Iterable[int]) -> list[int]:
    wanted = set(shift_ids)
    if not wanted:
        return []
    found = set(db.scalars(
        select(Shift.id).where(Shift.company_id == company_id, Shift.id.in_(wanted))
    ))
    return sorted(wanted - found)

def validate_sequence(db: Session, company_id: int, shift_ids: Iterable[int]) -> None:
    missing = missing_shift_ids(db, company_id, shift_ids)
    if missing:
        raise InvalidInput(f"rotation references unknown shifts: {missing}")

def create_rotation(db: Session, dto: RotationCreate) -> ShiftRotation:
    if not get_organization(db, dto.company_id):
        raise NotFound("organization not found")
    validate_sequence(db, dto.company_id, dto.shifts_in_sequence)

    row = ShiftRotation(
        company_id=dto.company_id,
        rotation_name=dto.rotation_name,
        rotation_frequency=dto.rotation_frequency,
        replace_existing_shift=dto.replace_existing_shift,
        shifts_in_sequence=list(dto.shifts_in_sequence),
    )
    db.add(row)
    commit_or_raise(db, conflict_detail="rotation could not be saved")
    db.refresh(row)
    logger.info("Created rotation %s (%s) for company %s with %d shifts",
                row.id, row.rotation_name, row.company_id, len(row.shifts_in_sequence))
    return row

def delete_rotation(db: Session, rotation_id: int, company_id: int) -> None:
    row = get_rotation_for_org(db, rotation_id, company_id)
    if not row:
        raise NotFound("Rotation not found")
    db.delete(row)
    commit_or_raise(db, conflict_detail="rotation could not be deleted")
    logger.info("Deleted rotation %s for company %s", rotation_id, company_id)
