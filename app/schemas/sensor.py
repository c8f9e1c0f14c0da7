from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.models.sensor import SensorType

class SensorBase(BaseModel):
    type: Optional[SensorType] = None
    unit: Optional[str] = None
    model: Optional[str] = None
    location: Optional[str] = None
    is_active: Optional[bool] = Field(None, strict=True)

class SensorCreate(SensorBase):
    pass

class SensorUpdate(SensorBase):
    pass

class SensorResponse(SensorBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class ReadingCreate(BaseModel):
    sensor_id: str
    time: Optional[datetime] = None
    value: float = Field(..., strict=True)  # strict: true/false is not a number

class ReadingUpdate(BaseModel):
    sensor_id: Optional[str] = None
    time: Optional[datetime] = None
    value: Optional[float] = Field(None, strict=True)

class ReadingResponse(BaseModel):
    id: str
    sensor_id: str
    time: Optional[datetime] = None
    value: float
    
    class Config:
        from_attributes = True
