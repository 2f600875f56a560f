from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import NotFound
from .schema import OrganizationSchema, OrganizationCreatePayload, OrganizationCreate
from . import service

organization_router = APIRouter(prefix="/organizations", tags=["Organizations"])

@organization_router.get("", response_model=list[OrganizationSchema])
def list_organizations(db: Session = Depends(get_db)):
    return service.list_organizations(db)

# Get org by id
@organization_router.get("/{org_id}", response_model=OrganizationSchema)
def organization_detail(org_id: int, db: Session = Depends(get_db)):
    obj = service.get_organization(db, org_id)
    if not obj:
        raise NotFound("organization not found")
    return obj

# Create org
@organization_router.post("", response_model=OrganizationSchema, status_code=status.HTTP_201_CREATED)
def organization_post(payload: OrganizationCreatePayload, db: Session = Depends(get_db)):
    dto = OrganizationCreate(name=payload.name, timezone=payload.timezone or "UTC")
    return service.create_organization(db, dto)
