from sqlalchemy import (
    Column, Integer, String, Date, DateTime, Numeric, Text, ForeignKey
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.utils.database import Base


class Payment(Base):
    __tablename__ = "payments"

    payment_id = Column(Integer, primary_key=True, index=True)

    tenant_id = Column(Integer, ForeignKey("tenants.tenant_id", ondelete="RESTRICT"), nullable=False, index=True)
    house_id = Column(Integer, ForeignKey("houses.house_id", ondelete="RESTRICT"), nullable=False, index=True)

    # full amount received, including any part that was not allocated
    amount_paid = Column(Numeric(12, 2), nullable=False)

    payment_date = Column(DateTime, server_default=func.now(), nullable=False)
    period_start = Column(Date, nullable=True)
    period_end = Column(Date, nullable=True)

    payment_method = Column(String(100), nullable=True)
    transaction_reference = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    created_on = Column(DateTime, server_default=func.now())

    allocations = relationship(
        "PaymentCharge",
        back_populates="payment",
        lazy="selectin",
        order_by="PaymentCharge.payment_charge_id",
    )
