from interpretlab.services.entity_store import EntityStore
from interpretlab.services.reference_validator import ReferenceValidator
from interpretlab.services.status_machine import (
    UNSET, StatusMachine, PermissiveStatusMachine, LifecycleStatusMachine,
    apply_status, get_status_machine
)
from interpretlab.services.catalog_service import CatalogService

__all__ = [
    "EntityStore", "ReferenceValidator", "UNSET", "StatusMachine",
    "PermissiveStatusMachine", "LifecycleStatusMachine", "apply_status",
    "get_status_machine", "CatalogService"
]
