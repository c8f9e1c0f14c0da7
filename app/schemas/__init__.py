from .user import UserResponse, UserCreate, UserUpdate
from .zone import ZoneResponse, ZoneCreate, ZoneUpdate
from .sensor import SensorResponse, SensorCreate, SensorUpdate, ReadingResponse, ReadingCreate, ReadingUpdate
from .device import DeviceResponse, DeviceCreate, DeviceUpdate

__all__ = [
    "UserResponse",
    "UserCreate",
    "UserUpdate",
    "ZoneResponse",
    "ZoneCreate",
    "ZoneUpdate",
    "SensorResponse",
    "SensorCreate",
    "SensorUpdate",
    "ReadingResponse",
    "ReadingCreate",
    "ReadingUpdate",
    "DeviceResponse",
    "DeviceCreate",
    "DeviceUpdate"
]
