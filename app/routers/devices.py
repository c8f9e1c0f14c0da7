from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.device import DeviceResponse, DeviceCreate, DeviceUpdate
from app.services import assets
from typing import List

router = APIRouter(prefix="/api/v1/devices", tags=["devices"])

@router.get("/", response_model=List[DeviceResponse])
def list_devices(db: Session = Depends(get_db)):
    """Get all devices"""
    return assets.devices(db).list()

@router.get("/{device_id}", response_model=DeviceResponse)
def get_device(device_id: str, db: Session = Depends(get_db)):
    """Get device by ID"""
    return assets.devices(db).get_by_id(device_id)

@router.post("/", response_model=DeviceResponse, status_code=201)
def create_device(device: DeviceCreate, db: Session = Depends(get_db)):
    """Create device after checking that owner, zone and sensors exist"""
    return assets.create_device(db, device.model_dump(exclude_unset=True))

@router.patch("/{device_id}", response_model=DeviceResponse)
def update_device(device_id: str, changes: DeviceUpdate, db: Session = Depends(get_db)):
    """Update only the supplied fields; supplied references are checked again"""
    return assets.update_device(db, device_id, changes.model_dump(exclude_unset=True))

@router.delete("/{device_id}")
def delete_device(device_id: str, db: Session = Depends(get_db)):
    """Delete device"""
    return {"id": assets.delete_device(db, device_id)}
