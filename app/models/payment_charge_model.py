from sqlalchemy import Column, Integer, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.utils.database import Base


class PaymentCharge(Base):
    __tablename__ = "payment_charges"
    __table_args__ = (
        UniqueConstraint("payment_id", "charge_id", name="uq_payment_charge"),
    )

    payment_charge_id = Column(Integer, primary_key=True, index=True)
    payment_id = Column(Integer, ForeignKey("payments.payment_id", ondelete="CASCADE"), nullable=False, index=True)
    charge_id = Column(Integer, ForeignKey("charges.charge_id", ondelete="RESTRICT"), nullable=False, index=True)

    amount_paid = Column(Numeric(12, 2), nullable=False)

    payment = relationship("Payment", back_populates="allocations")
