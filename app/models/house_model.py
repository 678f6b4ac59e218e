from sqlalchemy import Column, Integer, String, Boolean, Numeric, DateTime
from sqlalchemy.sql import func
from app.utils.database import Base


class House(Base):
    __tablename__ = "houses"

    house_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    address = Column(String(255), nullable=True)

    monthly_rent = Column(Numeric(12, 2), nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)

    created_on = Column(DateTime, server_default=func.now())
