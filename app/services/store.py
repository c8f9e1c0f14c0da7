"""
Entity store - generic CRUD over the SQLAlchemy models.

One EntityStore instance wraps a request-scoped Session and an EntitySpec that
names the pydantic models a payload is validated against (a full record on
create, a partial set of changes on update) and which fields must be unique.
Relational checks are plugged in by the caller through the before_write /
before_delete hooks so they run inside the same transaction as the write
itself.
"""
import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.services.errors import (
    AssetTrackingError,
    ConflictError,
    InvalidIdentifier,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# keys clients tend to echo back; never writable
IGNORED_FIELDS = ("id", "_id")


@dataclass(frozen=True)
class EntitySpec:
    name: str
    model: type
    record: Type[BaseModel]
    changes: Type[BaseModel]
    unique: Tuple[str, ...] = ()
    prepare: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(name for name, info in self.record.model_fields.items() if info.is_required())


def parse_identifier(value: Any, field_name: str = "id") -> str:
    """Return the canonical form of a UUID identifier or raise InvalidIdentifier."""
    if isinstance(value, uuid.UUID):
        return str(value)
    if not isinstance(value, str):
        raise InvalidIdentifier(value, field_name)
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise InvalidIdentifier(value, field_name) from None


class EntityStore:
    def __init__(self, db: Session, spec: EntitySpec):
        self.db = db
        self.spec = spec

    @property
    def model(self):
        return self.spec.model

    # ---------- validation ----------

    def _clean(self, payload: Optional[Dict[str, Any]], partial: bool = False) -> Dict[str, Any]:
        payload = {k: v for k, v in (payload or {}).items() if k not in IGNORED_FIELDS}
        schema = self.spec.changes if partial else self.spec.record
        try:
            values = schema.model_validate(payload).model_dump(exclude_unset=partial)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e) from None

        # changes may leave a required field out, never set it to null
        for name in self.spec.required:
            if name in values and values[name] is None:
                raise ValidationError(name, f"{name} is required")

        if self.spec.prepare:
            values = self.spec.prepare(values)
        return values

    def _check_unique(self, values: Dict[str, Any], exclude_id: Optional[str] = None):
        for name in self.spec.unique:
            value = values.get(name)
            if value is None:
                continue
            query = self.db.query(self.model.id).filter(getattr(self.model, name) == value)
            if exclude_id is not None:
                query = query.filter(self.model.id != exclude_id)
            if query.first() is not None:
                raise ConflictError(self.spec.name, name, value)

    # ---------- transaction helpers ----------

    @contextmanager
    def _transaction(self, action: str):
        try:
            yield
        except AssetTrackingError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage error while {action} {self.spec.name}: {str(e)}")
            raise StorageError(f"Storage failure while {action} {self.spec.name}") from e

    def _commit(self, values: Dict[str, Any]):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # a concurrent insert can still beat the uniqueness pre-check
            reason = str(e.orig)
            for name in self.spec.unique:
                if values.get(name) is not None and name in reason:
                    raise ConflictError(self.spec.name, name, values[name]) from e
            raise

    def _select_by_id(self, entity_id: str, lock: Optional[str] = None) -> Query:
        """lock="update" takes FOR UPDATE, lock="share" takes FOR SHARE"""
        query = self.db.query(self.model).filter(self.model.id == entity_id)
        if lock == "update":
            query = query.with_for_update()
        elif lock == "share":
            query = query.with_for_update(read=True)
        return query

    def _query_by_id(self, entity_id: str, lock: Optional[str] = None):
        return self._select_by_id(entity_id, lock).first()

    # ---------- operations ----------

    def find(self, entity_id: str, lock: Optional[str] = None):
        """Return the record for an already parsed id, or None."""
        with self._transaction("reading"):
            return self._query_by_id(entity_id, lock)

    def get_by_id(self, entity_id: Any):
        entity_id = parse_identifier(entity_id)
        record = self.find(entity_id)
        if record is None:
            raise NotFoundError(self.spec.name, entity_id)
        return record

    def list(self, order_by=None, limit: Optional[int] = None, **filters) -> List[Any]:
        with self._transaction("listing"):
            query = self.db.query(self.model)
            for name, value in filters.items():
                query = query.filter(getattr(self.model, name) == value)
            if order_by is not None:
                query = query.order_by(order_by)
            if limit is not None:
                query = query.limit(limit)
            return query.all()

    def count(self) -> int:
        with self._transaction("counting"):
            return self.db.query(func.count(self.model.id)).scalar()

    def count_where(self, field_name: str, value: Any) -> int:
        with self._transaction("counting"):
            return (
                self.db.query(func.count(self.model.id))
                .filter(getattr(self.model, field_name) == value)
                .scalar()
            )

    def create(self, payload: Dict[str, Any], before_write: Optional[Callable] = None):
        values = self._clean(payload)
        with self._transaction("creating"):
            self._check_unique(values)
            if before_write:
                before_write(values)
            record = self.model(id=str(uuid.uuid4()), **values)
            self.db.add(record)
            self._commit(values)
            self.db.refresh(record)
        logger.info(f"Created {self.spec.name} {record.id}")
        return record

    def update(self, entity_id: Any, changes: Dict[str, Any], before_write: Optional[Callable] = None):
        entity_id = parse_identifier(entity_id)
        values = self._clean(changes, partial=True)
        with self._transaction("updating"):
            record = self._query_by_id(entity_id, lock="update")
            if record is None:
                raise NotFoundError(self.spec.name, entity_id)
            self._check_unique(values, exclude_id=entity_id)
            if before_write:
                before_write(values)
            for name, value in values.items():
                setattr(record, name, value)
            self._commit(values)
            self.db.refresh(record)
        logger.info(f"Updated {self.spec.name} {entity_id}: {', '.join(sorted(values)) or 'no changes'}")
        return record

    def delete(self, entity_id: Any, before_delete: Optional[Callable[[str], None]] = None) -> str:
        entity_id = parse_identifier(entity_id)
        with self._transaction("deleting"):
            # row stays locked until commit so before_delete sees a stable target
            record = self._query_by_id(entity_id, lock="update")
            if record is None:
                raise NotFoundError(self.spec.name, entity_id)
            if before_delete:
                before_delete(entity_id)
            self.db.delete(record)
            self._commit({})
        logger.info(f"Deleted {self.spec.name} {entity_id}")
        return entity_id
