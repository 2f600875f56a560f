from __future__ import annotations
from typing import Optional
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import NotFound
from organization.deps import require_company

from .schema import (
    AssignmentSchema,
    AssignmentCreatePayload,
    AssignmentCreate,
    EffectiveShiftSchema,
    )
from . import service
from shift.schemas import ShiftSchema


assignment_router = APIRouter(prefix="/shift-assignments", tags=["Shift Assignments"])

# List assignments (scoped to the company). Optional filters.
@assignment_router.get("", response_model=list[AssignmentSchema])
def list_assignments(
    employee_id: Optional[int] = Query(None),
    shift_id: Optional[int] = Query(None),
    assigned_date: Optional[date] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    company_id: int = Depends(require_company),
    ):
    return service.get_assignments(
        db,
        company_id=company_id,
        employee_id=employee_id,
        shift_id=shift_id,
        assigned_date=assigned_date,
        start_date=start_date,
        end_date=end_date,
    )

# Shift an employee works on a date (assignment, else company default)
@assignment_router.get("/effective", response_model=EffectiveShiftSchema)
def effective_shift(
    employee_id: int = Query(...),
    on_date: date = Query(...),
    db: Session = Depends(get_db),
    company_id: int = Depends(require_company),
    ):
    shift, source = service.resolve_effective_shift(db, company_id, employee_id, on_date)
    return EffectiveShiftSchema(
        employee_id=employee_id,
        on_date=on_date,
        source=source,
        shift=ShiftSchema.model_validate(shift),
    )

@assignment_router.get("/{assignment_id}", response_model=AssignmentSchema)
def get_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    company_id: int = Depends(require_company),
    ):
    obj = service.get_assignment_for_org(db, assignment_id, company_id)
    if not obj:
        raise NotFound("assignment not found")
    return obj

# Direct assignment of one shift to one employee for one date
@assignment_router.post("", response_model=AssignmentSchema, status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreatePayload,
    db: Session = Depends(get_db),
    company_id: int = Depends(require_company),
    ):
    dto = AssignmentCreate(company_id=company_id, **payload.model_dump())
    return service.create_assignment(db, dto)
