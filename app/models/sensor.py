import enum
import uuid

from sqlalchemy import Column, String, Boolean, DateTime, Float, ForeignKey, Index
from sqlalchemy.sql import func
from app.database import Base, get_utc_datetime

class SensorType(str, enum.Enum):
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    CO2 = "co2"
    NOISE = "noise"

class Sensor(Base):
    __tablename__ = "sensors"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(String)  # SensorType value
    unit = Column(String)  # "°C", "%", "ppm"
    model = Column(String)
    location = Column(String)
    is_active = Column(Boolean)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

class Reading(Base):
    __tablename__ = "readings"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sensor_id = Column(String(36), ForeignKey("sensors.id"), nullable=False)
    time = Column(DateTime(timezone=True), default=get_utc_datetime)
    value = Column(Float, nullable=False)

# time-series lookup by sensor, newest first
Index("ix_readings_sensor_id_time", Reading.sensor_id, Reading.time.desc())
