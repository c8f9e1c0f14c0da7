"""
Error taxonomy for the asset tracking services.

Services raise these; the HTTP layer turns them into responses through the
exception handlers registered in app.main. Each error knows its status code
and how to render itself as a response body.
"""
import re
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError


class AssetTrackingError(Exception):
    status_code = 500
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def context(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.kind, "detail": self.message}
        body.update(self.context())
        return body


class ValidationError(AssetTrackingError):
    """Missing required field, wrong type or value outside an enumeration."""

    status_code = 400
    kind = "validation_error"

    def __init__(self, field: str, message: str, allowed: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.field = field
        self.allowed = list(allowed) if allowed is not None else None

    def context(self) -> Dict[str, Any]:
        ctx = {"field": self.field}
        if self.allowed is not None:
            ctx["allowed"] = self.allowed
        return ctx

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        """Report the first error pydantic found, naming the offending field"""
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "payload"
        allowed = None
        if error["type"] == "enum":
            # ctx["expected"] reads like: 'admin', 'technician' or 'viewer'
            allowed = re.findall(r"'([^']*)'", error["ctx"]["expected"])
        return cls(field, f"{field}: {error['msg']}", allowed=allowed)


class InvalidIdentifier(ValidationError):
    kind = "invalid_identifier"

    def __init__(self, value: Any, field: str = "id"):
        super().__init__(field, f"'{value}' is not a valid identifier")
        self.value = value


class ConflictError(AssetTrackingError):
    status_code = 409
    kind = "conflict"

    def __init__(self, entity: str, field: str, value: Any):
        super().__init__(f"{entity} with {field} '{value}' already exists")
        self.entity = entity
        self.field = field
        self.value = value

    def context(self) -> Dict[str, Any]:
        return {"entity": self.entity, "field": self.field}


class NotFoundError(AssetTrackingError):
    status_code = 404
    kind = "not_found"

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity.capitalize()} not found")
        self.entity = entity
        self.entity_id = entity_id

    def context(self) -> Dict[str, Any]:
        return {"entity": self.entity, "id": self.entity_id}


class ReferenceCheckError(AssetTrackingError):
    """A reference field of a Device or Reading payload did not resolve."""

    status_code = 400
    kind = "reference_error"
    reason = "is not a valid reference"

    def __init__(self, field: str, value: Any):
        super().__init__(f"{field} '{value}' {self.reason}")
        self.field = field
        self.value = value

    def context(self) -> Dict[str, Any]:
        return {"field": self.field, "value": self.value}


class InvalidReference(ReferenceCheckError):
    kind = "invalid_reference"
    reason = "is not a valid identifier"


class DanglingReference(ReferenceCheckError):
    kind = "dangling_reference"
    reason = "does not exist"


class InactiveReference(ReferenceCheckError):
    kind = "inactive_reference"
    reason = "is not active"


class HasDependents(AssetTrackingError):
    status_code = 409
    kind = "has_dependents"

    def __init__(self, entity: str, entity_id: str, count: int, dependent: str):
        super().__init__(
            f"Cannot delete {entity} {entity_id}: {count} {dependent} record(s) reference it"
        )
        self.entity = entity
        self.entity_id = entity_id
        self.count = count
        self.dependent = dependent

    def context(self) -> Dict[str, Any]:
        return {"entity": self.entity, "id": self.entity_id, "count": self.count, "dependent": self.dependent}


class StorageError(AssetTrackingError):
    """Underlying persistence failure. Fatal to the request, not to the process."""

    status_code = 500
    kind = "storage_error"
