from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import date, datetime
from decimal import Decimal


class ChargeCreate(BaseModel):
    tenant_id: int
    house_id: int
    charge_type: Literal["RENT", "DEPOSIT", "UTILITY", "LATE_FEE", "OTHER"] = "RENT"
    description: Optional[str] = None
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    due_date: date

    class Config:
        extra = "forbid"


class ChargeOut(BaseModel):
    charge_id: int
    tenant_id: int
    house_id: int
    charge_type: str
    description: Optional[str] = None

    amount: Decimal
    amount_paid: Decimal
    outstanding_amount: Decimal

    due_date: date
    status: str
    created_on: Optional[datetime] = None

    class Config:
        from_attributes = True


class OverdueChargeOut(BaseModel):
    charge_id: int
    tenant_id: int
    tenant_name: str
    house_id: int
    house_name: str
    due_date: date
    days_overdue: int
    outstanding_amount: Decimal
    status: str
