"""
Reference validator

Resolves the reference fields of Device and Reading payloads before a write
commits. Fields are checked in a fixed order and the first failure wins:
owner_id, zone_id, then each sensor in list order for devices; sensor_id
(which must also be active) for readings.

Only fields present in the payload are checked, so on partial updates the
untouched references are not re-validated. Null references are skipped.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.services.entities import SENSORS, USERS, ZONES
from app.services.errors import DanglingReference, InactiveReference, InvalidIdentifier, InvalidReference
from app.services.store import EntitySpec, EntityStore, parse_identifier

logger = logging.getLogger(__name__)


class ReferenceValidator:
    def __init__(self, db: Session):
        self.db = db

    def _resolve(self, spec: EntitySpec, field: str, value: Any, require_active: bool = False) -> str:
        try:
            entity_id = parse_identifier(value, field)
        except InvalidIdentifier:
            logger.warning(f"Rejected {field}={value!r}: malformed identifier")
            raise InvalidReference(field, value) from None

        # shared lock: a concurrent guarded delete of the target waits for us
        record = EntityStore(self.db, spec).find(entity_id, lock="share")
        if record is None:
            logger.warning(f"Rejected {field}={entity_id}: no such {spec.name}")
            raise DanglingReference(field, value)
        if require_active and not record.is_active:
            logger.warning(f"Rejected {field}={entity_id}: {spec.name} is not active")
            raise InactiveReference(field, value)
        return entity_id

    def check_device(self, values: Dict[str, Any]) -> None:
        """Validate owner_id, zone_id and sensors, normalizing the ids in place"""
        if values.get("owner_id") is not None:
            values["owner_id"] = self._resolve(USERS, "owner_id", values["owner_id"])
        if values.get("zone_id") is not None:
            values["zone_id"] = self._resolve(ZONES, "zone_id", values["zone_id"])
        sensors: Optional[list] = values.get("sensors")
        if sensors is not None:
            values["sensors"] = [self._resolve(SENSORS, "sensors", s) for s in sensors]

    def check_reading(self, values: Dict[str, Any]) -> None:
        """Validate sensor_id: the sensor must exist and be active"""
        if values.get("sensor_id") is not None:
            values["sensor_id"] = self._resolve(SENSORS, "sensor_id", values["sensor_id"], require_active=True)
