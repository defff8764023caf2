"""Error taxonomy shared by the services and the HTTP layer.

Every error carries a ``kind`` plus the offending field/entity and id, so a
caller can build a user-facing message without parsing strings.
"""
from typing import Any, Dict, Optional


class CatalogError(Exception):
    """Base class for errors raised by the catalog services."""

    kind = "catalog_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind}


class ValidationError(CatalogError):
    """Malformed input, raised before anything is persisted."""

    kind = "validation"
    status_code = 422

    def __init__(self, field: str, message: str, errors: Optional[list] = None):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        detail = {"kind": self.kind, "field": self.field}
        if self.errors:
            detail["errors"] = self.errors
        return detail


class InvalidStatusTransition(ValidationError):
    """Target status is not reachable from the current status."""

    kind = "invalid_transition"

    def __init__(self, entity: str, current: str, target: str):
        super().__init__("status", f"{entity} cannot move from '{current}' to '{target}'")
        self.entity = entity
        self.current = current
        self.target = target

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "field": self.field,
            "entity": self.entity,
            "current": self.current,
            "target": self.target,
        }


class InvalidReference(CatalogError):
    """A foreign key given at creation time does not resolve to a row."""

    kind = "invalid_reference"
    status_code = 400

    def __init__(self, which: str, id: int):
        super().__init__(f"{which} with id {id} not found")
        self.which = which
        self.id = id

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "field": f"{self.which}_id", "which": self.which, "id": self.id}


class NotFound(CatalogError):
    """The entity addressed by an update does not exist."""

    kind = "not_found"
    status_code = 404

    def __init__(self, entity: str, id: int):
        super().__init__(f"{entity} with id {id} not found")
        self.entity = entity
        self.id = id

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "entity": self.entity, "id": self.id}
