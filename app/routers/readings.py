from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.sensor import ReadingResponse, ReadingCreate, ReadingUpdate
from app.services import assets
from typing import List

router = APIRouter(prefix="/api/v1/readings", tags=["readings"])

@router.get("/", response_model=List[ReadingResponse])
def list_readings(db: Session = Depends(get_db)):
    """Get all readings"""
    return assets.readings(db).list()

@router.get("/{reading_id}", response_model=ReadingResponse)
def get_reading(reading_id: str, db: Session = Depends(get_db)):
    """Get reading by ID"""
    return assets.readings(db).get_by_id(reading_id)

@router.post("/", response_model=ReadingResponse, status_code=201)
def create_reading(reading: ReadingCreate, db: Session = Depends(get_db)):
    """Record a reading for an existing, active sensor"""
    return assets.create_reading(db, reading.model_dump())

@router.patch("/{reading_id}", response_model=ReadingResponse)
def update_reading(reading_id: str, changes: ReadingUpdate, db: Session = Depends(get_db)):
    """Update only the supplied fields of a reading"""
    return assets.update_reading(db, reading_id, changes.model_dump(exclude_unset=True))

@router.delete("/{reading_id}")
def delete_reading(reading_id: str, db: Session = Depends(get_db)):
    """Delete reading"""
    return {"id": assets.delete_reading(db, reading_id)}
