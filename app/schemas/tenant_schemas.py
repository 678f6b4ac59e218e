from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal


class TenantBase(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., min_length=3, max_length=150)
    phone: Optional[str] = None
    house_id: Optional[int] = None
    lease_start_date: Optional[date] = None
    lease_end_date: Optional[date] = None
    security_deposit: Decimal = Field(Decimal("0.00"), ge=0)
    is_active: bool = True

    class Config:
        extra = "forbid"


class TenantCreate(TenantBase):
    @model_validator(mode="after")
    def lease_dates_in_order(self):
        if self.lease_start_date and self.lease_end_date and self.lease_end_date < self.lease_start_date:
            raise ValueError("lease_end_date cannot be before lease_start_date")
        return self


class TenantUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=150)
    email: Optional[str] = Field(None, min_length=3, max_length=150)
    phone: Optional[str] = None
    house_id: Optional[int] = None
    lease_start_date: Optional[date] = None
    lease_end_date: Optional[date] = None
    security_deposit: Optional[Decimal] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("full_name", "email", "security_deposit", "is_active")
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    class Config:
        extra = "forbid"


class TenantOut(TenantBase):
    tenant_id: int
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None

    class Config:
        from_attributes = True
