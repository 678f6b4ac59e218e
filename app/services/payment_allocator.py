"""
Payment allocation against outstanding charges.

A payment is spread over the payer's eligible charges oldest due date first
(ties by charge id). Each charge receives min(remaining, outstanding) until
the payment is used up or the charges run out. Whatever is left over is
reported as unallocated; it is not carried forward to later charges.

The work happens in three steps:
  1. read the eligible charges
  2. plan the allocation on plain value snapshots (no DB access)
  3. write payment + allocation rows + updated charges and commit once

Charges carry a version counter, so a charge that another writer changed
between steps 1 and 3 makes the commit fail with ConcurrencyConflict and
nothing is written. record_payment() retries the whole thing from a fresh
read in that case.

The allocator does not guard against the same payment being allocated
twice; callers must record each payment exactly once.
"""
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.config import ALLOCATION_MAX_ATTEMPTS
from app.models.charge_model import Charge
from app.models.payment_model import Payment
from app.models.payment_charge_model import PaymentCharge
from app.utils.money import ZERO, charge_status, money

logger = logging.getLogger(__name__)


# -------------------------------------------------
# Errors
# -------------------------------------------------
class AllocationError(Exception):
    """Base class for allocation failures."""


class InvalidPayment(AllocationError):
    pass


class PersistenceFailure(AllocationError):
    pass


class ConcurrencyConflict(AllocationError):
    pass


# -------------------------------------------------
# Value records
# -------------------------------------------------
@dataclass(frozen=True)
class ChargeState:
    charge_id: int
    due_date: date
    amount: Decimal
    amount_paid: Decimal

    @classmethod
    def from_charge(cls, charge: Charge) -> "ChargeState":
        return cls(
            charge_id=charge.charge_id,
            due_date=charge.due_date,
            amount=money(charge.amount),
            amount_paid=money(charge.amount_paid),
        )

    @property
    def outstanding(self) -> Decimal:
        return money(self.amount - self.amount_paid)

    @property
    def status(self) -> str:
        return charge_status(self.amount, self.amount_paid)


@dataclass(frozen=True)
class Allocation:
    charge_id: int
    amount: Decimal


@dataclass
class AllocationResult:
    allocations: List[Allocation] = field(default_factory=list)
    remaining: Decimal = ZERO
    # charge_id -> state after allocation, only for charges that received money
    charges: Dict[int, ChargeState] = field(default_factory=dict)
    payment_id: Optional[int] = None

    @property
    def allocated(self) -> Decimal:
        return money(sum((a.amount for a in self.allocations), ZERO))


# -------------------------------------------------
# Planning (pure)
# -------------------------------------------------
def settlement_order(charges: Iterable[ChargeState]) -> List[ChargeState]:
    return sorted(charges, key=lambda c: (c.due_date, c.charge_id))


def plan_allocation(amount, charges: Iterable[ChargeState]) -> AllocationResult:
    remaining = money(amount)
    if remaining <= 0:
        raise InvalidPayment("Payment amount must be > 0")

    result = AllocationResult()

    for state in settlement_order(charges):
        if remaining <= 0:
            break

        outstanding = state.outstanding
        if outstanding <= 0:
            continue

        apply_amt = outstanding if remaining >= outstanding else remaining

        result.allocations.append(Allocation(charge_id=state.charge_id, amount=apply_amt))
        result.charges[state.charge_id] = replace(
            state, amount_paid=money(state.amount_paid + apply_amt)
        )
        remaining = money(remaining - apply_amt)

    result.remaining = remaining
    return result


# -------------------------------------------------
# Store access
# -------------------------------------------------
def find_eligible_charges(db: Session, tenant_id: int, charge_ids) -> List[Charge]:
    """
    Charges from `charge_ids` that exist, belong to `tenant_id` and still
    have something outstanding, in settlement order. Anything else is
    dropped without error.
    """
    ids = list(dict.fromkeys(charge_ids or []))
    if not ids:
        return []

    rows = (
        db.query(Charge)
        .filter(Charge.charge_id.in_(ids))
        .order_by(Charge.due_date.asc(), Charge.charge_id.asc())
        .all()
    )

    eligible = []
    for charge in rows:
        if charge.tenant_id != tenant_id:
            logger.warning(
                "Skipping charge %s: belongs to tenant %s, payment is for tenant %s",
                charge.charge_id, charge.tenant_id, tenant_id,
            )
            continue
        if money(charge.outstanding_amount) <= 0:
            continue
        eligible.append(charge)

    return eligible


# -------------------------------------------------
# Allocation (transactional)
# -------------------------------------------------
def allocate_payment(db: Session, payment: Payment, charge_ids) -> AllocationResult:
    """
    Persist `payment` and apply it to the eligible charges among
    `charge_ids`. Commits once; on any failure the session is rolled back
    and nothing from this call is visible.
    """
    amount = money(payment.amount_paid)
    if amount <= 0:
        raise InvalidPayment("Payment amount must be > 0")
    payment.amount_paid = amount

    try:
        charges = find_eligible_charges(db, payment.tenant_id, charge_ids)
        by_id = {c.charge_id: c for c in charges}

        result = plan_allocation(amount, [ChargeState.from_charge(c) for c in charges])

        db.add(payment)
        db.flush()  # gives payment.payment_id
        payment_id = payment.payment_id

        for a in result.allocations:
            db.add(
                PaymentCharge(
                    payment_id=payment_id,
                    charge_id=a.charge_id,
                    amount_paid=a.amount,
                )
            )

            state = result.charges[a.charge_id]
            charge = by_id[a.charge_id]
            charge.amount_paid = state.amount_paid
            charge.status = state.status

        db.commit()

    except StaleDataError as e:
        db.rollback()
        raise ConcurrencyConflict(
            "A charge was updated by another payment; allocation rolled back"
        ) from e
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceFailure(f"Unable to record payment: {e}") from e
    except Exception:
        db.rollback()
        raise

    result.payment_id = payment_id

    logger.info(
        "Payment %s for tenant %s: %s allocated over %d charge(s), %s unallocated",
        payment_id, payment.tenant_id, result.allocated, len(result.allocations), result.remaining,
    )
    return result


def record_payment(
        db: Session,
        payment_fields: dict,
        charge_ids,
        max_attempts: Optional[int] = None,
) -> AllocationResult:
    """
    Build a Payment from `payment_fields` and allocate it, starting over
    from a fresh read whenever a concurrent writer got to a charge first.
    The last ConcurrencyConflict is re-raised once attempts run out.
    """
    attempts = max_attempts or ALLOCATION_MAX_ATTEMPTS

    attempt = 1
    while True:
        payment = Payment(**payment_fields)
        try:
            return allocate_payment(db, payment, charge_ids)
        except ConcurrencyConflict:
            if attempt >= attempts:
                raise
            logger.warning(
                "Allocation conflict for tenant %s (attempt %d/%d), retrying",
                payment_fields.get("tenant_id"), attempt, attempts,
            )
            attempt += 1
