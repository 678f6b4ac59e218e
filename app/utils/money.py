from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Charge status values
UNPAID = "UNPAID"
PARTIAL = "PARTIAL"
PAID = "PAID"


def money(x) -> Decimal:
    """Always return 2-decimal Decimal with HALF_UP rounding."""
    if x is None:
        x = 0
    if not isinstance(x, Decimal):
        x = Decimal(str(x))
    return x.quantize(CENT, rounding=ROUND_HALF_UP)


def charge_status(amount, amount_paid) -> str:
    """
    Status is derived only from what has been paid against the charge:
      PAID    -> amount_paid covers amount
      PARTIAL -> 0 < amount_paid < amount
      UNPAID  -> nothing paid yet
    """
    amount = money(amount)
    amount_paid = money(amount_paid)

    if amount_paid >= amount:
        return PAID
    if amount_paid > 0:
        return PARTIAL
    return UNPAID
