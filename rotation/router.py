from __future__ import annotations
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import NotFound
from organization.deps import require_company

from .schema import (
    RotationSchema,
    RotationCreatePayload,
    RotationCreate,
    RotationRunRequest,
    RotationRunResponse,
)
from . import service
from .run_service import run_rotation as run_rotation_service

rotation_router = APIRouter(prefix="/shift-rotations", tags=["Shift Rotations"])


@rotation_router.get("", response_model=list[RotationSchema])
def list_rotations(db: Session = Depends(get_db), company_id: int = Depends(require_company)):
    return service.get_rotations(db, company_id=company_id)


@rotation_router.get("/{rotation_id}", response_model=RotationSchema)
def get_rotation(rotation_id: int, db: Session = Depends(get_db), company_id: int = Depends(require_company)):
    obj = service.get_rotation_for_org(db, rotation_id, company_id)
    if not obj:
        raise NotFound("Rotation not found")
    return obj


@rotation_router.post("", response_model=RotationSchema, status_code=status.HTTP_201_CREATED)
def create_rotation(
    payload: RotationCreatePayload,
    db: Session = Depends(get_db),
    company_id: int = Depends(require_company),
    ):
    dto = RotationCreate(company_id=company_id, **payload.model_dump())
    return service.create_rotation(db, dto)


@rotation_router.delete("/{rotation_id}")
def delete_rotation(rotation_id: int, db: Session = Depends(get_db), company_id: int = Depends(require_company)):
    service.delete_rotation(db, rotation_id, company_id)
    return {"message": "Rotation deleted"}


@rotation_router.post("/run", response_model=RotationRunResponse)
def run_rotation(
    payload: RotationRunRequest,
    db: Session = Depends(get_db),
    company_id: int = Depends(require_company),
    ):
    # "today" is resolved here so the engine only ever sees an explicit date
    assigned_date = payload.start_date or datetime.now(timezone.utc).date()
    return run_rotation_service(
        db=db,
        company_id=company_id,
        rotation_id=payload.rotation_id,
        employee_ids=payload.employee_ids,
        assigned_date=assigned_date,
        dry_run=payload.dry_run,
    )
