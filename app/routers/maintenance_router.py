# app/routers/maintenance_router.py
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.utils.database import get_db
from app.models.maintenance_request_model import MaintenanceRequest
from app.models.tenant_model import Tenant
from app.models.house_model import House
from app.schemas.maintenance_schemas import (
    MaintenanceRequestCreate,
    MaintenanceRequestOut,
    MaintenanceRequestUpdate,
)

router = APIRouter(prefix="/maintenance-requests", tags=["Maintenance"])

OPEN_STATUSES = ("PENDING", "IN_PROGRESS")


def _get_request_or_404(db: Session, request_id: int) -> MaintenanceRequest:
    req = db.query(MaintenanceRequest).filter(MaintenanceRequest.request_id == request_id).first()
    if not req:
        raise HTTPException(status_code=404, detail="Maintenance request not found")
    return req


# --------------------------------------
# OPEN REQUESTS (before /{request_id})
# --------------------------------------
@router.get("/pending", response_model=list[MaintenanceRequestOut])
def pending_requests(db: Session = Depends(get_db)):
    return (
        db.query(MaintenanceRequest)
        .filter(MaintenanceRequest.status.in_(OPEN_STATUSES))
        .order_by(MaintenanceRequest.requested_at.desc(), MaintenanceRequest.request_id.desc())
        .all()
    )


# --------------------------------------
# CREATE
# --------------------------------------
@router.post("/", response_model=MaintenanceRequestOut, status_code=status.HTTP_201_CREATED)
def create_request(payload: MaintenanceRequestCreate, db: Session = Depends(get_db)):
    if not db.query(Tenant).filter(Tenant.tenant_id == payload.tenant_id).first():
        raise HTTPException(status_code=404, detail="Tenant not found")
    if not db.query(House).filter(House.house_id == payload.house_id).first():
        raise HTTPException(status_code=404, detail="House not found")

    req = MaintenanceRequest(**payload.model_dump(), status="PENDING")
    db.add(req)
    db.commit()
    db.refresh(req)
    return req


# --------------------------------------
# LIST
# --------------------------------------
@router.get("/", response_model=list[MaintenanceRequestOut])
def list_requests(
    tenant_id: Optional[int] = Query(None),
    house_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    q = db.query(MaintenanceRequest)

    if tenant_id is not None:
        q = q.filter(MaintenanceRequest.tenant_id == tenant_id)

    if house_id is not None:
        q = q.filter(MaintenanceRequest.house_id == house_id)

    return q.order_by(MaintenanceRequest.requested_at.desc(), MaintenanceRequest.request_id.desc()).all()


# --------------------------------------
# DETAILS
# --------------------------------------
@router.get("/{request_id}", response_model=MaintenanceRequestOut)
def get_request(request_id: int, db: Session = Depends(get_db)):
    return _get_request_or_404(db, request_id)


# --------------------------------------
# UPDATE (status / notes / priority)
# --------------------------------------
@router.put("/{request_id}", response_model=MaintenanceRequestOut)
def update_request(
    request_id: int,
    payload: MaintenanceRequestUpdate,
    db: Session = Depends(get_db),
):
    req = _get_request_or_404(db, request_id)
    data = payload.model_dump(exclude_unset=True)

    for key, value in data.items():
        setattr(req, key, value)

    if data.get("status") == "COMPLETED" and req.completed_at is None:
        req.completed_at = datetime.now()
    elif "status" in data and data["status"] != "COMPLETED":
        req.completed_at = None

    db.commit()
    db.refresh(req)
    return req


# --------------------------------------
# DELETE
# --------------------------------------
@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_request(request_id: int, db: Session = Depends(get_db)):
    req = _get_request_or_404(db, request_id)
    db.delete(req)
    db.commit()
    return
