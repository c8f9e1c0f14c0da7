# app/routers/sensors.py
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.sensor import SensorResponse, SensorCreate, SensorUpdate, ReadingResponse
from app.services import assets

router = APIRouter(prefix="/api/v1/sensors", tags=["sensors"])

@router.get("/", response_model=List[SensorResponse])
def list_sensors(db: Session = Depends(get_db)):
    """Get all sensors"""
    return assets.sensors(db).list()

@router.get("/{sensor_id}", response_model=SensorResponse)
def get_sensor(sensor_id: str, db: Session = Depends(get_db)):
    """Get sensor by ID"""
    return assets.sensors(db).get_by_id(sensor_id)

# ---------- Ultime letture del sensore ----------
@router.get("/{sensor_id}/readings", response_model=List[ReadingResponse])
def get_sensor_readings(
    sensor_id: str,
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db)
):
    """Get the latest readings of a sensor, newest first"""
    return assets.list_sensor_readings(db, sensor_id, limit=limit)

@router.post("/", response_model=SensorResponse, status_code=201)
def create_sensor(sensor: SensorCreate, db: Session = Depends(get_db)):
    """Create new sensor"""
    return assets.create_sensor(db, sensor.model_dump())

@router.patch("/{sensor_id}", response_model=SensorResponse)
def update_sensor(sensor_id: str, changes: SensorUpdate, db: Session = Depends(get_db)):
    """Update only the supplied fields of a sensor"""
    return assets.update_sensor(db, sensor_id, changes.model_dump(exclude_unset=True))

@router.delete("/{sensor_id}")
def delete_sensor(sensor_id: str, db: Session = Depends(get_db)):
    """Delete sensor, refused while readings reference it"""
    return {"id": assets.delete_sensor(db, sensor_id)}
