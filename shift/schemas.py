from datetime import time
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from .models import Weekday


def _unique_days(days: list[Weekday]) -> list[Weekday]:
    # working days are a set; keep first occurrence order for stable output
    seen: list[Weekday] = []
    for d in days:
        if d not in seen:
            seen.append(d)
    return seen


class ShiftSchema(BaseModel):
    id: int
    company_id: int
    shift_name: str
    start_time: time
    end_time: time
    working_days: list[Weekday] = []
    is_default: bool = False

    model_config = ConfigDict(from_attributes=True)

class ShiftCreatePayload(BaseModel):
    shift_name: str = Field(..., min_length=1, max_length=120)
    start_time: time = Field(..., description="Wall clock, e.g. 09:00")
    end_time: time = Field(..., description="Earlier than start_time for overnight shifts")
    working_days: list[Weekday] = Field(default_factory=list)
    is_default: bool = False

    model_config = ConfigDict(extra="forbid")

    @field_validator("shift_name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("shift_name must not be blank")
        return v

    @field_validator("working_days")
    @classmethod
    def dedupe_days(cls, v: list[Weekday]) -> list[Weekday]:
        return _unique_days(v)

    @model_validator(mode="after")
    def non_zero_length(self):
        if self.start_time == self.end_time:
            raise ValueError("start time and end time cannot be equal")
        return self

# Internal DTO the service uses
class ShiftCreate(BaseModel):
    company_id: int
    shift_name: str
    start_time: time
    end_time: time
    working_days: list[Weekday] = Field(default_factory=list)
    is_default: bool = False

class ShiftUpdate(BaseModel):
    shift_name: Optional[str] = Field(None, min_length=1, max_length=120)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    working_days: Optional[list[Weekday]] = None
    is_default: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("shift_name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("shift_name must not be blank")
        return v

    @field_validator("working_days")
    @classmethod
    def dedupe_days(cls, v: Optional[list[Weekday]]) -> Optional[list[Weekday]]:
        return _unique_days(v) if v is not None else v

    @model_validator(mode="after")
    def check_times_if_both_present(self):
        if self.start_time is not None and self.end_time is not None and self.start_time == self.end_time:
            raise ValueError("start time and end time cannot be equal")
        return self
