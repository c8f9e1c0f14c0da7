"""
Asset tracking operations used by the routers and the seed script.

Plain CRUD goes straight to the entity store. Device and reading writes go
through the reference validator; user, zone and sensor deletes go through
the deletion guard.
"""
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.models import Reading
from app.services.entities import DEVICES, READINGS, SENSORS, USERS, ZONES
from app.services.errors import NotFoundError
from app.services.guard import DeletionGuard
from app.services.references import ReferenceValidator
from app.services.store import EntityStore, parse_identifier


def users(db: Session) -> EntityStore:
    return EntityStore(db, USERS)

def zones(db: Session) -> EntityStore:
    return EntityStore(db, ZONES)

def sensors(db: Session) -> EntityStore:
    return EntityStore(db, SENSORS)

def devices(db: Session) -> EntityStore:
    return EntityStore(db, DEVICES)

def readings(db: Session) -> EntityStore:
    return EntityStore(db, READINGS)


# ---------- users ----------

def create_user(db: Session, payload: Dict[str, Any]):
    return users(db).create(payload)

def update_user(db: Session, user_id: Any, changes: Dict[str, Any]):
    return users(db).update(user_id, changes)

def delete_user(db: Session, user_id: Any) -> str:
    return users(db).delete(user_id, before_delete=DeletionGuard(db).for_entity("user"))


# ---------- zones ----------

def create_zone(db: Session, payload: Dict[str, Any]):
    return zones(db).create(payload)

def update_zone(db: Session, zone_id: Any, changes: Dict[str, Any]):
    return zones(db).update(zone_id, changes)

def delete_zone(db: Session, zone_id: Any) -> str:
    return zones(db).delete(zone_id, before_delete=DeletionGuard(db).for_entity("zone"))


# ---------- sensors ----------

def create_sensor(db: Session, payload: Dict[str, Any]):
    return sensors(db).create(payload)

def update_sensor(db: Session, sensor_id: Any, changes: Dict[str, Any]):
    return sensors(db).update(sensor_id, changes)

def delete_sensor(db: Session, sensor_id: Any) -> str:
    return sensors(db).delete(sensor_id, before_delete=DeletionGuard(db).for_entity("sensor"))

def list_sensor_readings(db: Session, sensor_id: Any, limit: int = 100) -> List[Reading]:
    """Readings of one sensor, newest first"""
    sensor_id = parse_identifier(sensor_id)
    if sensors(db).find(sensor_id) is None:
        raise NotFoundError("sensor", sensor_id)
    return readings(db).list(order_by=Reading.time.desc(), limit=limit, sensor_id=sensor_id)


# ---------- devices ----------

def create_device(db: Session, payload: Dict[str, Any]):
    return devices(db).create(payload, before_write=ReferenceValidator(db).check_device)

def update_device(db: Session, device_id: Any, changes: Dict[str, Any]):
    return devices(db).update(device_id, changes, before_write=ReferenceValidator(db).check_device)

def delete_device(db: Session, device_id: Any) -> str:
    return devices(db).delete(device_id)


# ---------- readings ----------

def create_reading(db: Session, payload: Dict[str, Any]):
    return readings(db).create(payload, before_write=ReferenceValidator(db).check_reading)

def update_reading(db: Session, reading_id: Any, changes: Dict[str, Any]):
    return readings(db).update(reading_id, changes, before_write=ReferenceValidator(db).check_reading)

def delete_reading(db: Session, reading_id: Any) -> str:
    return readings(db).delete(reading_id)


def collection_counts(db: Session) -> Dict[str, int]:
    return {
        "users": users(db).count(),
        "zones": zones(db).count(),
        "sensors": sensors(db).count(),
        "devices": devices(db).count(),
        "readings": readings(db).count(),
    }
