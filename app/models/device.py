import enum
import uuid

from sqlalchemy import Column, String, JSON, DateTime, ForeignKey
from sqlalchemy.sql import func
from app.database import Base

class DeviceStatus(str, enum.Enum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    OFFLINE = "offline"

class Device(Base):
    __tablename__ = "devices"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    serial_number = Column(String, unique=True, index=True, nullable=False)
    model = Column(String)
    status = Column(String)  # DeviceStatus value
    installed_at = Column(DateTime(timezone=True))
    owner_id = Column(String(36), ForeignKey("users.id"), index=True)
    zone_id = Column(String(36), ForeignKey("zones.id"), index=True)
    sensors = Column(JSON, default=list)  # ordered sensor ids
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
