from sqlalchemy import (
    Column, Integer, String, Date, DateTime, Boolean, Numeric, ForeignKey
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.utils.database import Base


class Tenant(Base):
    __tablename__ = "tenants"

    tenant_id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(150), nullable=False)
    email = Column(String(150), unique=True, nullable=False)
    phone = Column(String(30), nullable=True)

    house_id = Column(Integer, ForeignKey("houses.house_id", ondelete="SET NULL"), nullable=True, index=True)

    # lease terms
    lease_start_date = Column(Date, nullable=True)
    lease_end_date = Column(Date, nullable=True)
    security_deposit = Column(Numeric(12, 2), nullable=False, default=0)

    is_active = Column(Boolean, nullable=False, default=True)

    created_on = Column(DateTime, server_default=func.now())
    updated_on = Column(DateTime, server_default=func.now(), onupdate=func.now())

    house = relationship("House")
