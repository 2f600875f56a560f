from typing import Optional
from fastapi import Query

from core.exceptions import MissingCompany

def require_company(
    company_id: Optional[int] = Query(None, description="Organization the request is scoped to"),
    ) -> int:
    if company_id is None:
        raise MissingCompany("Company ID is required")
    return company_id
