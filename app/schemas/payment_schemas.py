from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal


class PaymentCreate(BaseModel):
    tenant_id: int
    house_id: int

    amount_paid: Decimal = Field(max_digits=12, decimal_places=2)
    payment_date: Optional[datetime] = None
    period_start: Optional[date] = None
    period_end: Optional[date] = None

    payment_method: Optional[str] = Field(None, max_length=100)
    transaction_reference: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=1000)

    # charges to settle; order here does not matter
    charge_ids: List[int] = Field(default_factory=list)

    @field_validator("payment_method", "transaction_reference", "notes", mode="before")
    def empty_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @model_validator(mode="after")
    def period_in_order(self):
        if self.period_start and self.period_end and self.period_end < self.period_start:
            raise ValueError("period_end cannot be before period_start")
        return self

    class Config:
        extra = "forbid"


class AllocationOut(BaseModel):
    charge_id: int
    amount_paid: Decimal

    class Config:
        from_attributes = True


class PaymentOut(BaseModel):
    payment_id: int
    tenant_id: int
    house_id: int

    amount_paid: Decimal
    payment_date: datetime
    period_start: Optional[date] = None
    period_end: Optional[date] = None

    payment_method: Optional[str] = None
    transaction_reference: Optional[str] = None
    notes: Optional[str] = None

    allocations: List[AllocationOut] = []

    class Config:
        from_attributes = True


class PaymentResult(BaseModel):
    payment_id: int
    amount_paid: Decimal
    allocated: Decimal
    unallocated: Decimal
    allocations: List[AllocationOut]


class PaymentSummaryOut(BaseModel):
    from_date: date
    to_date: date
    payment_count: int
    total_received: Decimal
    total_allocated: Decimal
    total_unallocated: Decimal
