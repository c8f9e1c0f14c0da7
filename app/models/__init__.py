from app.database import Base
from .user import User, UserRole
from .zone import Zone
from .sensor import Sensor, SensorType, Reading
from .device import Device, DeviceStatus

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Zone",
    "Sensor",
    "SensorType",
    "Reading",
    "Device",
    "DeviceStatus"
]
