from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

class OrganizationSchema(BaseModel):
    id: int
    name: str
    timezone: str
    model_config = ConfigDict(from_attributes=True)

# what clients send
class OrganizationCreatePayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    timezone: Optional[str] = Field(None, max_length=64, description="IANA name, defaults to UTC")
    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

# internal DTO for service
class OrganizationCreate(BaseModel):
    name: str
    timezone: str = "UTC"
