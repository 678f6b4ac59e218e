# app/routers/tenants_router.py
from datetime import date, timedelta
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.utils.database import get_db
from app.utils.security import require_policy
from app.models.tenant_model import Tenant
from app.models.house_model import House
from app.models.charge_model import Charge
from app.models.payment_model import Payment
from app.schemas.tenant_schemas import TenantCreate, TenantOut, TenantUpdate
from app.schemas.charge_schemas import ChargeOut
from app.schemas.payment_schemas import PaymentOut

router = APIRouter(prefix="/tenants", tags=["Tenants"])

VIEW = [Depends(require_policy("ViewUsersPolicy"))]
ADD = [Depends(require_policy("AddUserPolicy"))]
EDIT = [Depends(require_policy("EditUserPolicy"))]
DELETE = [Depends(require_policy("DeleteUserPolicy"))]


def _get_tenant_or_404(db: Session, tenant_id: int) -> Tenant:
    tenant = db.query(Tenant).filter(Tenant.tenant_id == tenant_id).first()
    if not tenant:
        raise HTTPException(404, "Tenant not found")
    return tenant


def _ensure_house(db: Session, house_id: Optional[int]):
    if house_id is None:
        return
    house = db.query(House).filter(House.house_id == house_id).first()
    if not house:
        raise HTTPException(400, "Invalid house_id")


# CREATE
@router.post("/", response_model=TenantOut, dependencies=ADD)
def create_tenant(payload: TenantCreate, db: Session = Depends(get_db)):
    _ensure_house(db, payload.house_id)

    exists = db.query(Tenant).filter(Tenant.email == payload.email).first()
    if exists:
        raise HTTPException(400, "Tenant email already exists")

    tenant = Tenant(**payload.model_dump())
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


# READ ALL
@router.get("/", response_model=list[TenantOut], dependencies=VIEW)
def list_tenants(
        house_id: Optional[int] = Query(None),
        is_active: Optional[bool] = Query(None),
        search: Optional[str] = Query(None),
        db: Session = Depends(get_db),
):
    q = db.query(Tenant)

    if house_id is not None:
        q = q.filter(Tenant.house_id == house_id)

    if is_active is not None:
        q = q.filter(Tenant.is_active == is_active)

    if search:
        like = f"%{search.strip()}%"
        q = q.filter(Tenant.full_name.ilike(like) | Tenant.email.ilike(like))

    return q.order_by(Tenant.full_name.asc()).all()


# EXPIRING LEASES (static, before /{tenant_id})
@router.get("/expiring-leases", response_model=list[TenantOut], dependencies=VIEW)
def expiring_leases(
        within_days: int = Query(30, ge=0, le=366),
        as_on: Optional[date] = Query(None),
        db: Session = Depends(get_db),
):
    as_on = as_on or date.today()
    until = as_on + timedelta(days=within_days)

    return (
        db.query(Tenant)
        .filter(
            Tenant.is_active == True,  # noqa: E712
            Tenant.lease_end_date.isnot(None),
            Tenant.lease_end_date > as_on,
            Tenant.lease_end_date <= until,
        )
        .order_by(Tenant.lease_end_date.asc(), Tenant.tenant_id.asc())
        .all()
    )


# READ ONE
@router.get("/{tenant_id}", response_model=TenantOut, dependencies=VIEW)
def get_tenant(tenant_id: int, db: Session = Depends(get_db)):
    return _get_tenant_or_404(db, tenant_id)


# UPDATE
@router.put("/{tenant_id}", response_model=TenantOut, dependencies=EDIT)
def update_tenant(
        tenant_id: int,
        payload: TenantUpdate,
        db: Session = Depends(get_db),
):
    tenant = _get_tenant_or_404(db, tenant_id)
    data = payload.model_dump(exclude_unset=True)

    if "house_id" in data:
        _ensure_house(db, data["house_id"])

    if data.get("email") is not None:
        dup = (
            db.query(Tenant)
            .filter(Tenant.email == data["email"], Tenant.tenant_id != tenant_id)
            .first()
        )
        if dup:
            raise HTTPException(400, "Tenant email already in use")

    start = data.get("lease_start_date", tenant.lease_start_date)
    end = data.get("lease_end_date", tenant.lease_end_date)
    if start and end and end < start:
        raise HTTPException(422, "lease_end_date cannot be before lease_start_date")

    for key, value in data.items():
        setattr(tenant, key, value)

    db.commit()
    db.refresh(tenant)
    return tenant


# DELETE
@router.delete("/{tenant_id}", dependencies=DELETE)
def delete_tenant(tenant_id: int, db: Session = Depends(get_db)):
    tenant = _get_tenant_or_404(db, tenant_id)

    has_payments = db.query(Payment).filter(Payment.tenant_id == tenant_id).first()
    if has_payments:
        raise HTTPException(409, "Tenant has recorded payments; deactivate instead")

    try:
        db.delete(tenant)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(409, "Tenant is still referenced by other records")
    return {"message": "Tenant deleted successfully"}


# =================================================
# 🔹 TENANT ACCOUNT
# =================================================
@router.get("/{tenant_id}/payments", response_model=list[PaymentOut], dependencies=VIEW)
def tenant_payments(tenant_id: int, db: Session = Depends(get_db)):
    _get_tenant_or_404(db, tenant_id)
    return (
        db.query(Payment)
        .filter(Payment.tenant_id == tenant_id)
        .order_by(Payment.payment_date.desc(), Payment.payment_id.desc())
        .all()
    )


@router.get("/{tenant_id}/charges", response_model=list[ChargeOut], dependencies=VIEW)
def tenant_charges(
        tenant_id: int,
        outstanding_only: bool = Query(False),
        db: Session = Depends(get_db),
):
    _get_tenant_or_404(db, tenant_id)

    q = db.query(Charge).filter(Charge.tenant_id == tenant_id)
    if outstanding_only:
        q = q.filter(Charge.outstanding_amount > 0)

    return q.order_by(Charge.due_date.asc(), Charge.charge_id.asc()).all()
