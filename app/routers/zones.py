from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.zone import ZoneResponse, ZoneCreate, ZoneUpdate
from app.services import assets
from typing import List

router = APIRouter(prefix="/api/v1/zones", tags=["zones"])

@router.get("/", response_model=List[ZoneResponse])
def get_zones(db: Session = Depends(get_db)):
    """Get all zones"""
    return assets.zones(db).list()

@router.get("/{zone_id}", response_model=ZoneResponse)
def get_zone(zone_id: str, db: Session = Depends(get_db)):
    """Get zone by ID"""
    return assets.zones(db).get_by_id(zone_id)

@router.post("/", response_model=ZoneResponse, status_code=201)
def create_zone(zone: ZoneCreate, db: Session = Depends(get_db)):
    """Create new zone"""
    return assets.create_zone(db, zone.model_dump())

@router.patch("/{zone_id}", response_model=ZoneResponse)
def update_zone(zone_id: str, changes: ZoneUpdate, db: Session = Depends(get_db)):
    """Update only the supplied fields of a zone"""
    return assets.update_zone(db, zone_id, changes.model_dump(exclude_unset=True))

@router.delete("/{zone_id}")
def delete_zone(zone_id: str, db: Session = Depends(get_db)):
    """Delete zone, refused while devices are placed in it"""
    return {"id": assets.delete_zone(db, zone_id)}
