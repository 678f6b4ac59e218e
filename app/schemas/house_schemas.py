from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal


class HouseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: Optional[str] = None
    monthly_rent: Decimal = Field(Decimal("0.00"), ge=0)
    is_available: bool = True

    class Config:
        extra = "forbid"


class HouseCreate(HouseBase):
    pass


class HouseUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = None
    monthly_rent: Optional[Decimal] = Field(None, ge=0)
    is_available: Optional[bool] = None

    @field_validator("name", "monthly_rent", "is_available")
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    class Config:
        extra = "forbid"


class HouseOut(HouseBase):
    house_id: int
    created_on: Optional[datetime] = None

    class Config:
        from_attributes = True
