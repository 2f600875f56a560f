from __future__ import annotations
from datetime import date, datetime
from typing import Optional, List, Literal
from pydantic import BaseModel, Field, ConfigDict, field_validator


# ---------- DB -> API (read) ----------
class RotationSchema(BaseModel):
    id: int
    company_id: int
    rotation_name: str
    rotation_frequency: str
    replace_existing_shift: bool = False
    shifts_in_sequence: List[int] = []
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---------- Client -> API (create) ----------
class RotationCreatePayload(BaseModel):
    rotation_name: str = Field(..., min_length=1, max_length=120)
    rotation_frequency: str = Field(..., min_length=1, max_length=50, description="e.g. weekly, monthly")
    replace_existing_shift: bool = False
    shifts_in_sequence: List[int] = Field(default_factory=list, description="Shift ids in rotation order")

    model_config = ConfigDict(extra="forbid")

    @field_validator("rotation_name", "rotation_frequency")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


# ---------- Internal DTO (service layer) ----------
class RotationCreate(BaseModel):
    company_id: int
    rotation_name: str
    rotation_frequency: str
    replace_existing_shift: bool = False
    shifts_in_sequence: List[int] = Field(default_factory=list)


# ---------- Client -> API (run) ----------
class RotationRunRequest(BaseModel):
    rotation_id: int
    employee_ids: List[int]
    start_date: Optional[date] = Field(None, description="Defaults to today (UTC)")
    dry_run: bool = False

    model_config = ConfigDict(extra="forbid")


class EmployeeRunResult(BaseModel):
    employee_id: int
    shift_id: int
    outcome: Literal["created", "replaced", "unchanged", "skipped", "failed"]
    error: Optional[str] = None


class RotationRunResponse(BaseModel):
    assignments_created: int
    created: int
    replaced: int
    unchanged: int
    skipped: int
    failed: int
    assigned_date: date
    dry_run: bool
    message: str
    results: List[EmployeeRunResult]
