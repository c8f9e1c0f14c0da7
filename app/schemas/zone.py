from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.schemas.fields import NonBlankStr

class ZoneBase(BaseModel):
    name: NonBlankStr
    description: Optional[str] = None
    is_active: Optional[bool] = Field(None, strict=True)

class ZoneCreate(ZoneBase):
    pass

class ZoneUpdate(BaseModel):
    name: Optional[NonBlankStr] = None
    description: Optional[str] = None
    is_active: Optional[bool] = Field(None, strict=True)

class ZoneResponse(ZoneBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
