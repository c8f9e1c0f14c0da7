"""
Deletion guard

Refuses to delete a user, zone or sensor while other records still point at
it. The store calls check() after it has locked the target row and before the
DELETE, all in one transaction; since the reference validator takes a shared
lock on the same row before inserting a dependent, no dependent can slip in
between the count and the delete on engines with row locking. SQLite has no
row locks but serializes writers on the whole database.
"""
import logging
from typing import Callable, Dict, Tuple

from sqlalchemy.orm import Session

from app.services.entities import DEVICES, READINGS
from app.services.errors import HasDependents
from app.services.store import EntitySpec, EntityStore

logger = logging.getLogger(__name__)

# entity -> (dependent spec, dependent reference field)
DEPENDENCY_RULES: Dict[str, Tuple[EntitySpec, str]] = {
    "user": (DEVICES, "owner_id"),
    "zone": (DEVICES, "zone_id"),
    "sensor": (READINGS, "sensor_id"),
}


class DeletionGuard:
    def __init__(self, db: Session):
        self.db = db

    def check(self, entity: str, entity_id: str) -> None:
        dependent_spec, field = DEPENDENCY_RULES[entity]
        count = EntityStore(self.db, dependent_spec).count_where(field, entity_id)
        if count > 0:
            logger.warning(f"Blocked delete of {entity} {entity_id}: {count} {dependent_spec.name}(s) reference it")
            raise HasDependents(entity, entity_id, count, dependent_spec.name)

    def for_entity(self, entity: str) -> Callable[[str], None]:
        """Bind the guard to one entity type, for EntityStore.delete(before_delete=...)"""
        return lambda entity_id: self.check(entity, entity_id)
