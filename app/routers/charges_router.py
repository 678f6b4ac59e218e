from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional, Literal

from app.utils.database import get_db
from app.utils.money import money, PAID
from app.models.charge_model import Charge
from app.models.tenant_model import Tenant
from app.models.house_model import House
from app.schemas.charge_schemas import ChargeCreate, ChargeOut, OverdueChargeOut

router = APIRouter(prefix="/charges", tags=["Charges"])


# =================================================
# 🔹 STATIC ROUTES (ALWAYS FIRST)
# =================================================
@router.get("/overdue", response_model=list[OverdueChargeOut])
def overdue_charges(
        as_on: Optional[date] = Query(None),
        tenant_id: Optional[int] = Query(None),
        db: Session = Depends(get_db),
):
    as_on = as_on or date.today()

    q = (
        db.query(Charge, Tenant, House)
        .join(Tenant, Tenant.tenant_id == Charge.tenant_id)
        .join(House, House.house_id == Charge.house_id)
        .filter(Charge.due_date < as_on, Charge.status != PAID)
    )
    if tenant_id is not None:
        q = q.filter(Charge.tenant_id == tenant_id)

    rows = q.order_by(Charge.due_date.asc(), Charge.charge_id.asc()).all()

    return [
        OverdueChargeOut(
            charge_id=c.charge_id,
            tenant_id=t.tenant_id,
            tenant_name=t.full_name,
            house_id=h.house_id,
            house_name=h.name,
            due_date=c.due_date,
            days_overdue=(as_on - c.due_date).days,
            outstanding_amount=money(c.outstanding_amount),
            status=c.status,
        )
        for c, t, h in rows
    ]


# =================================================
# 🔹 BILLING
# =================================================
@router.post("/", response_model=ChargeOut)
def create_charge(payload: ChargeCreate, db: Session = Depends(get_db)):
    tenant = db.query(Tenant).filter(Tenant.tenant_id == payload.tenant_id).first()
    if not tenant:
        raise HTTPException(404, "Tenant not found")

    house = db.query(House).filter(House.house_id == payload.house_id).first()
    if not house:
        raise HTTPException(404, "House not found")

    charge = Charge(
        tenant_id=payload.tenant_id,
        house_id=payload.house_id,
        charge_type=payload.charge_type,
        description=payload.description,
        amount=money(payload.amount),
        amount_paid=money(0),
        due_date=payload.due_date,
        status="UNPAID",
    )
    db.add(charge)
    db.commit()
    db.refresh(charge)
    return charge


@router.get("/", response_model=list[ChargeOut])
def list_charges(
        tenant_id: Optional[int] = Query(None),
        house_id: Optional[int] = Query(None),
        status: Optional[Literal["UNPAID", "PARTIAL", "PAID"]] = Query(None),
        db: Session = Depends(get_db),
):
    q = db.query(Charge)

    if tenant_id is not None:
        q = q.filter(Charge.tenant_id == tenant_id)

    if house_id is not None:
        q = q.filter(Charge.house_id == house_id)

    if status:
        q = q.filter(Charge.status == status)

    return q.order_by(Charge.due_date.asc(), Charge.charge_id.asc()).all()


# =================================================
# 🔹 DYNAMIC ROUTES (LAST)
# =================================================
@router.get("/{charge_id}", response_model=ChargeOut)
def get_charge(charge_id: int, db: Session = Depends(get_db)):
    charge = db.query(Charge).filter(Charge.charge_id == charge_id).first()
    if not charge:
        raise HTTPException(404, "Charge not found")
    return charge
