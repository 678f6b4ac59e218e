from sqlalchemy import (
    Column, Integer, String, DateTime, Text, ForeignKey, Index
)
from sqlalchemy.sql import func
from app.utils.database import Base


class MaintenanceRequest(Base):
    __tablename__ = "maintenance_requests"

    __table_args__ = (
        Index("ix_maintenance_status", "status"),
    )

    request_id = Column(Integer, primary_key=True, index=True)

    tenant_id = Column(Integer, ForeignKey("tenants.tenant_id", ondelete="CASCADE"), nullable=False, index=True)
    house_id = Column(Integer, ForeignKey("houses.house_id", ondelete="RESTRICT"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    # LOW / MEDIUM / HIGH / URGENT
    priority = Column(String(20), nullable=False, default="MEDIUM")
    # PENDING / IN_PROGRESS / COMPLETED / CANCELLED
    status = Column(String(20), nullable=False, default="PENDING")

    manager_notes = Column(Text, nullable=True)

    requested_at = Column(DateTime, server_default=func.now(), nullable=False)
    completed_at = Column(DateTime, nullable=True)
