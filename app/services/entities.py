"""
Entity definitions for the store.

Each entity gets a record model (full payload, used on create) and a changes
model (partial payload, used on update). Both extend the request schemas with
a stricter config: unknown fields are rejected and enum values are stored as
plain strings. Reference fields accept anything here; their shape is checked
by the reference validator so that a malformed reference reports as such.
"""
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator

from app.models import Device, Reading, Sensor, User, Zone
from app.schemas.device import DeviceCreate, DeviceUpdate
from app.schemas.sensor import ReadingCreate, ReadingUpdate, SensorCreate, SensorUpdate
from app.schemas.user import UserCreate, UserUpdate
from app.schemas.zone import ZoneCreate, ZoneUpdate
from app.services.security import hash_password
from app.services.store import EntitySpec

STORE_CONFIG = ConfigDict(extra="forbid", use_enum_values=True)


def _sensor_list(value: Any) -> Any:
    # null means "no sensors"
    return [] if value is None else value


class UserRecord(UserCreate):
    model_config = STORE_CONFIG


class UserChanges(UserUpdate):
    model_config = STORE_CONFIG

    @field_validator("password")
    @classmethod
    def password_not_cleared(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("password cannot be removed")
        return value


class ZoneRecord(ZoneCreate):
    model_config = STORE_CONFIG


class ZoneChanges(ZoneUpdate):
    model_config = STORE_CONFIG


class SensorRecord(SensorCreate):
    model_config = STORE_CONFIG


class SensorChanges(SensorUpdate):
    model_config = STORE_CONFIG


class DeviceRecord(DeviceCreate):
    model_config = STORE_CONFIG

    owner_id: Any = None
    zone_id: Any = None
    sensors: List[Any] = Field(default_factory=list)

    @field_validator("sensors", mode="before")
    @classmethod
    def null_sensors_are_empty(cls, value: Any) -> Any:
        return _sensor_list(value)


class DeviceChanges(DeviceUpdate):
    model_config = STORE_CONFIG

    owner_id: Any = None
    zone_id: Any = None
    sensors: Optional[List[Any]] = None

    @field_validator("sensors", mode="before")
    @classmethod
    def null_sensors_are_empty(cls, value: Any) -> Any:
        return _sensor_list(value)


class ReadingRecord(ReadingCreate):
    model_config = STORE_CONFIG

    sensor_id: Any


class ReadingChanges(ReadingUpdate):
    model_config = STORE_CONFIG

    sensor_id: Any = None


def _prepare_user(values: Dict[str, Any]) -> Dict[str, Any]:
    """Swap the plain password for its bcrypt hash"""
    if "password" not in values:
        return values
    values = dict(values)
    password = values.pop("password")
    values["password_hash"] = hash_password(password) if password is not None else None
    return values


def _prepare_reading(values: Dict[str, Any]) -> Dict[str, Any]:
    # a null time falls back to the column default on insert
    if "time" in values and values["time"] is None:
        values = {k: v for k, v in values.items() if k != "time"}
    return values


USERS = EntitySpec(
    name="user",
    model=User,
    record=UserRecord,
    changes=UserChanges,
    unique=("email",),
    prepare=_prepare_user,
)

ZONES = EntitySpec(name="zone", model=Zone, record=ZoneRecord, changes=ZoneChanges)

SENSORS = EntitySpec(name="sensor", model=Sensor, record=SensorRecord, changes=SensorChanges)

DEVICES = EntitySpec(
    name="device",
    model=Device,
    record=DeviceRecord,
    changes=DeviceChanges,
    unique=("serial_number",),
)

READINGS = EntitySpec(
    name="reading",
    model=Reading,
    record=ReadingRecord,
    changes=ReadingChanges,
    prepare=_prepare_reading,
)
