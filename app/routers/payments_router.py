from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import date, datetime, time, timedelta
from starlette import status

from app.utils.database import get_db
from app.utils.money import money
from app.models.tenant_model import Tenant
from app.models.house_model import House
from app.models.payment_model import Payment
from app.models.payment_charge_model import PaymentCharge
from app.services.payment_allocator import (
    record_payment,
    InvalidPayment,
    ConcurrencyConflict,
    PersistenceFailure,
)
from app.schemas.payment_schemas import (
    PaymentCreate,
    PaymentOut,
    PaymentResult,
    PaymentSummaryOut,
    AllocationOut,
)

router = APIRouter(prefix="/payments", tags=["Payments"])


# =================================================
# 🔹 STATIC ROUTES (ALWAYS FIRST)
# =================================================
@router.get("/summary", response_model=PaymentSummaryOut)
def payment_summary(
        from_date: date,
        to_date: date,
        db: Session = Depends(get_db),
):
    if to_date < from_date:
        raise HTTPException(400, "to_date cannot be before from_date")

    start = datetime.combine(from_date, time.min)
    end = datetime.combine(to_date + timedelta(days=1), time.min)

    received = (
        db.query(
            func.count(Payment.payment_id),
            func.coalesce(func.sum(Payment.amount_paid), 0),
        )
        .filter(Payment.payment_date >= start, Payment.payment_date < end)
        .one()
    )

    allocated = (
        db.query(func.coalesce(func.sum(PaymentCharge.amount_paid), 0))
        .join(Payment, Payment.payment_id == PaymentCharge.payment_id)
        .filter(Payment.payment_date >= start, Payment.payment_date < end)
        .scalar()
    )

    total_received = money(received[1])
    total_allocated = money(allocated)

    return PaymentSummaryOut(
        from_date=from_date,
        to_date=to_date,
        payment_count=int(received[0]),
        total_received=total_received,
        total_allocated=total_allocated,
        total_unallocated=money(total_received - total_allocated),
    )


# =================================================
# ✅ RECORD PAYMENT + ALLOCATE
# =================================================
@router.post("/", response_model=PaymentResult, status_code=status.HTTP_201_CREATED)
def create_payment(payload: PaymentCreate, db: Session = Depends(get_db)):
    tenant = db.query(Tenant).filter(Tenant.tenant_id == payload.tenant_id).first()
    if not tenant:
        raise HTTPException(404, "Tenant not found")

    house = db.query(House).filter(House.house_id == payload.house_id).first()
    if not house:
        raise HTTPException(404, "House not found")

    fields = payload.model_dump(exclude={"charge_ids"}, exclude_none=True)

    try:
        result = record_payment(db, fields, payload.charge_ids)
    except InvalidPayment as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(e))
    except ConcurrencyConflict as e:
        raise HTTPException(status.HTTP_409_CONFLICT, str(e))
    except PersistenceFailure as e:
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return PaymentResult(
        payment_id=result.payment_id,
        amount_paid=money(payload.amount_paid),
        allocated=result.allocated,
        unallocated=result.remaining,
        allocations=[
            AllocationOut(charge_id=a.charge_id, amount_paid=a.amount)
            for a in result.allocations
        ],
    )


@router.get("/", response_model=list[PaymentOut])
def list_payments(
        page: int = Query(1, ge=1),
        page_size: int = Query(50, ge=1),
        db: Session = Depends(get_db),
):
    page_size = min(page_size, 200)

    return (
        db.query(Payment)
        .order_by(Payment.payment_date.desc(), Payment.payment_id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )


# =================================================
# 🔹 DYNAMIC ROUTES (LAST)
# =================================================
@router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(payment_id: int, db: Session = Depends(get_db)):
    payment = db.query(Payment).filter(Payment.payment_id == payment_id).first()
    if not payment:
        raise HTTPException(404, "Payment not found")
    return payment
