from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from core.database import get_db
from core.exceptions import NotFound
from organization.deps import require_company
from .schemas import ShiftSchema, ShiftCreatePayload, ShiftCreate, ShiftUpdate
from shift import service

shift_router = APIRouter(prefix="/shifts", tags=["Shifts"])

@shift_router.get("", response_model=list[ShiftSchema])
def list_shifts(db: Session = Depends(get_db), company_id: int = Depends(require_company)):
    return service.get_shifts(db, company_id=company_id)

@shift_router.get("/{shift_id}", response_model=ShiftSchema)
def get_shift(shift_id: int, db: Session = Depends(get_db), company_id: int = Depends(require_company)):
    obj = service.get_shift_for_org(db, shift_id, company_id)
    if not obj:
        raise NotFound("Shift not found")
    return obj

@shift_router.post("", response_model=ShiftSchema, status_code=status.HTTP_201_CREATED)
def create_shift(payload: ShiftCreatePayload, db: Session = Depends(get_db), company_id: int = Depends(require_company)):
    internal = ShiftCreate(company_id=company_id, **payload.model_dump())
    return service.create_shift(db, internal)

@shift_router.put("/{shift_id}", response_model=ShiftSchema)
@shift_router.patch("/{shift_id}", response_model=ShiftSchema)
def update_shift(shift_id: int, payload: ShiftUpdate, db: Session = Depends(get_db), company_id: int = Depends(require_company)):
    return service.update_shift(db, shift_id, company_id, payload)

@shift_router.delete("/{shift_id}")
def delete_shift(shift_id: int, db: Session = Depends(get_db), company_id: int = Depends(require_company)):
    service.delete_shift(db, shift_id, company_id)
    return {"message": "Shift deleted"}

@shift_router.post("/{shift_id}/set-default", response_model=ShiftSchema)
def set_default_shift(shift_id: int, db: Session = Depends(get_db), company_id: int = Depends(require_company)):
    return service.set_default_shift(db, shift_id, company_id)
