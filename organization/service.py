from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import select

from core.database import commit_or_raise
from core.exceptions import NotFound
from .models import Organization
from .schema import OrganizationCreate

def list_organizations(db: Session) -> List[Organization]:
    stmt = select(Organization).order_by(Organization.name.asc())
    return list(db.scalars(stmt))

def get_organization(db: Session, org_id: int) -> Optional[Organization]:
    return db.get(Organization, org_id)

def create_organization(db: Session, dto: OrganizationCreate) -> Organization:
    org = Organization(name=dto.name, timezone=dto.timezone or "UTC")
    db.add(org)
    commit_or_raise(db, conflict_detail="organization name already exists")
    db.refresh(org)
    return org

def lock_organization(db: Session, org_id: int) -> Organization:
    """
    Take a row lock on the company's organization row for the rest of the
    current transaction. Every default-shift mutation goes through here, so
    two admins of the same company are serialized on this row.
    """
    stmt = select(Organization).where(Organization.id == org_id).with_for_update()
    org = db.scalars(stmt).first()
    if not org:
        raise NotFound("organization not found")
    return org
