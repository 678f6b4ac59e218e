# app/routers/houses_router.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.utils.database import get_db
from app.models.house_model import House
from app.schemas.house_schemas import HouseCreate, HouseOut, HouseUpdate

router = APIRouter(prefix="/houses", tags=["Houses"])


# CREATE
@router.post("/", response_model=HouseOut)
def create_house(payload: HouseCreate, db: Session = Depends(get_db)):
    exists = db.query(House).filter(House.name == payload.name).first()
    if exists:
        raise HTTPException(400, "House name already exists")

    house = House(**payload.model_dump())
    db.add(house)
    db.commit()
    db.refresh(house)
    return house


# READ ALL
@router.get("/", response_model=list[HouseOut])
def list_houses(
        is_available: Optional[bool] = Query(
            default=None,
            description="Filter by availability"
        ),
        db: Session = Depends(get_db),
):
    query = db.query(House)

    if is_available is not None:
        query = query.filter(House.is_available == is_available)

    return query.order_by(House.name.asc()).all()


# READ ONE
@router.get("/{house_id}", response_model=HouseOut)
def get_house(house_id: int, db: Session = Depends(get_db)):
    house = db.query(House).filter(House.house_id == house_id).first()
    if not house:
        raise HTTPException(404, "House not found")

    return house


# UPDATE
@router.put("/{house_id}", response_model=HouseOut)
def update_house(
        house_id: int,
        payload: HouseUpdate,
        db: Session = Depends(get_db),
):
    house = db.query(House).filter(House.house_id == house_id).first()
    if not house:
        raise HTTPException(404, "House not found")

    if payload.name is not None:
        dup = (
            db.query(House)
            .filter(
                House.name == payload.name,
                House.house_id != house_id,
            )
            .first()
        )
        if dup:
            raise HTTPException(400, "House name already in use")

    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(house, key, value)

    db.commit()
    db.refresh(house)
    return house


# DELETE
@router.delete("/{house_id}")
def delete_house(house_id: int, db: Session = Depends(get_db)):
    house = db.query(House).filter(House.house_id == house_id).first()
    if not house:
        raise HTTPException(404, "House not found")

    try:
        db.delete(house)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(409, "House still has charges, payments or maintenance requests")
    return {"message": "House deleted successfully"}
