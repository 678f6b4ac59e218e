from pydantic import BaseModel, Field, field_validator
from typing import Optional, Literal
from datetime import datetime

Priority = Literal["LOW", "MEDIUM", "HIGH", "URGENT"]
RequestStatus = Literal["PENDING", "IN_PROGRESS", "COMPLETED", "CANCELLED"]


class MaintenanceRequestCreate(BaseModel):
    tenant_id: int
    house_id: int
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Priority = "MEDIUM"

    class Config:
        extra = "forbid"


class MaintenanceRequestUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[RequestStatus] = None
    manager_notes: Optional[str] = None

    # priority and status columns are NOT NULL too
    @field_validator("title", "priority", "status")
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    class Config:
        extra = "forbid"


class MaintenanceRequestOut(BaseModel):
    request_id: int
    tenant_id: int
    house_id: int
    title: str
    description: Optional[str] = None
    priority: str
    status: str
    manager_notes: Optional[str] = None
    requested_at: datetime
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True
