from __future__ import annotations
from datetime import date
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

from shift.schemas import ShiftSchema


class AssignmentSchema(BaseModel):
    id: int
    company_id: int
    employee_id: int
    shift_id: int
    assigned_date: date
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload from clients
class AssignmentCreatePayload(BaseModel):
    employee_id: int = Field(..., ge=1)
    shift_id: int = Field(..., ge=1)
    assigned_date: date
    model_config = ConfigDict(extra="forbid")


# INTERNAL DTO for the service
class AssignmentCreate(BaseModel):
    company_id: int
    employee_id: int
    shift_id: int
    assigned_date: date


class EffectiveShiftSchema(BaseModel):
    employee_id: int
    on_date: date
    source: Literal["assignment", "default"]
    shift: ShiftSchema
