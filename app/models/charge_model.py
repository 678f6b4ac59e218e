# app/models/charge_model.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Numeric,
    Text,
    ForeignKey,
    Index,
    func,
)
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import relationship

from app.utils.database import Base


class Charge(Base):
    __tablename__ = "charges"

    charge_id = Column(Integer, primary_key=True, index=True)

    tenant_id = Column(Integer, ForeignKey("tenants.tenant_id", ondelete="CASCADE"), nullable=False)
    house_id = Column(Integer, ForeignKey("houses.house_id", ondelete="RESTRICT"), nullable=False)

    # RENT / DEPOSIT / UTILITY / LATE_FEE / OTHER
    charge_type = Column(String(30), nullable=False, default="RENT")
    description = Column(Text, nullable=True)

    amount = Column(Numeric(12, 2), nullable=False)
    # only ever increased by payment allocation
    amount_paid = Column(Numeric(12, 2), nullable=False, default=0)

    due_date = Column(Date, nullable=False)

    # UNPAID / PARTIAL / PAID, derived from amount_paid vs amount
    status = Column(String(20), nullable=False, default="UNPAID")

    # bumped on every UPDATE; a stale read makes the flush fail
    version_id = Column(Integer, nullable=False)

    created_on = Column(DateTime, server_default=func.now())

    tenant = relationship("Tenant", backref="charges")
    house = relationship("House")

    __mapper_args__ = {"version_id_col": version_id}

    __table_args__ = (
        Index("ix_charges_tenant_due", "tenant_id", "due_date"),
        Index("ix_charges_tenant_status", "tenant_id", "status"),
    )

    @hybrid_property
    def outstanding_amount(self):
        return self.amount - self.amount_paid
