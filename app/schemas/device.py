from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from app.models.device import DeviceStatus
from app.schemas.fields import NonBlankStr

class DeviceBase(BaseModel):
    serial_number: NonBlankStr
    model: Optional[str] = None
    status: Optional[DeviceStatus] = None
    installed_at: Optional[datetime] = None
    owner_id: Optional[str] = None
    zone_id: Optional[str] = None
    sensors: Optional[List[str]] = []

class DeviceCreate(DeviceBase):
    pass

class DeviceUpdate(BaseModel):
    serial_number: Optional[NonBlankStr] = None
    model: Optional[str] = None
    status: Optional[DeviceStatus] = None
    installed_at: Optional[datetime] = None
    owner_id: Optional[str] = None
    zone_id: Optional[str] = None
    sensors: Optional[List[str]] = None

class DeviceResponse(DeviceBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
