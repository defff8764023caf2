"""
Status transitions for models, datasets and analyses.

Two machines share one interface. ``PermissiveStatusMachine`` is the
default: every declared status is a legal target from every status, so the
machine only does bookkeeping. ``LifecycleStatusMachine`` enforces the
conventional upload/analysis lifecycle and can be selected with
``STATUS_MACHINE=lifecycle``.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet

from interpretlab.core.errors import InvalidStatusTransition, NotFound, ValidationError
from interpretlab.models.enums import AnalysisStatus, AssetStatus, EntityType
from interpretlab.services.entity_store import EntityStore

logger = logging.getLogger(__name__)


class _Unset:
    """Marker for a payload the caller did not send."""

    def __repr__(self):
        return "UNSET"


UNSET: Any = _Unset()

STATUSES: Dict[EntityType, FrozenSet[str]] = {
    EntityType.MODEL: frozenset(s.value for s in AssetStatus),
    EntityType.DATASET: frozenset(s.value for s in AssetStatus),
    EntityType.ANALYSIS: frozenset(s.value for s in AnalysisStatus),
}

# ORM attribute that travels with a status change
PAYLOAD_FIELDS = {
    EntityType.MODEL: "metadata_",
    EntityType.DATASET: "metadata_",
    EntityType.ANALYSIS: "results",
}

_ASSET_LIFECYCLE = {
    "uploading": frozenset({"processing", "ready", "error"}),
    "processing": frozenset({"ready", "error"}),
    "error": frozenset({"processing"}),
    "ready": frozenset({"processing"}),
}

LIFECYCLE_TRANSITIONS: Dict[EntityType, Dict[str, FrozenSet[str]]] = {
    EntityType.MODEL: _ASSET_LIFECYCLE,
    EntityType.DATASET: _ASSET_LIFECYCLE,
    EntityType.ANALYSIS: {
        "pending": frozenset({"running", "completed", "failed"}),
        "running": frozenset({"completed", "failed"}),
        "failed": frozenset({"pending", "running"}),
        "completed": frozenset({"running"}),
    },
}


class StatusMachine(ABC):
    """Decides which status an entity may move to next."""

    name = "abstract"

    @abstractmethod
    def allowed_targets(self, entity_type: EntityType, current: str) -> FrozenSet[str]:
        ...

    def check_declared(self, entity_type: EntityType, target: str):
        """Reject a target that is not a status of this entity type at all."""
        entity_type = EntityType(entity_type)
        if entity_type not in STATUSES:
            raise ValidationError("entity_type", f"{entity_type.value} has no status")
        if target not in STATUSES[entity_type]:
            raise ValidationError(
                "status",
                f"'{target}' is not a {entity_type.value} status, expected one of {sorted(STATUSES[entity_type])}",
            )

    def check(self, entity_type: EntityType, current: str, target: str):
        entity_type = EntityType(entity_type)
        self.check_declared(entity_type, target)
        if target not in self.allowed_targets(entity_type, current):
            raise InvalidStatusTransition(entity_type.value, current, target)


class PermissiveStatusMachine(StatusMachine):
    """Any declared status is reachable from any status."""

    name = "permissive"

    def allowed_targets(self, entity_type: EntityType, current: str) -> FrozenSet[str]:
        return STATUSES[EntityType(entity_type)]


class LifecycleStatusMachine(StatusMachine):
    """Upload and analysis lifecycle; staying in the same status is allowed."""

    name = "lifecycle"

    def allowed_targets(self, entity_type: EntityType, current: str) -> FrozenSet[str]:
        table = LIFECYCLE_TRANSITIONS[EntityType(entity_type)]
        return table.get(current, frozenset()) | {current}


STATUS_MACHINES = {
    PermissiveStatusMachine.name: PermissiveStatusMachine,
    LifecycleStatusMachine.name: LifecycleStatusMachine,
}


def get_status_machine(name: str) -> StatusMachine:
    try:
        return STATUS_MACHINES[name]()
    except KeyError:
        raise ValueError(f"Unknown status machine '{name}', expected one of {sorted(STATUS_MACHINES)}")


async def apply_status(
    store: EntityStore,
    machine: StatusMachine,
    entity_type: EntityType,
    entity_id: int,
    status: str,
    payload: Any = UNSET,
):
    """
    Move an entity to ``status`` and return the updated row.

    ``payload`` is the entity's metadata (model, dataset) or results
    (analysis). Left as UNSET the stored value is kept; ``None`` clears it;
    a map replaces it whole, without merging.
    """
    entity_type = EntityType(entity_type)
    status = getattr(status, "value", status)
    # malformed input is reported before the row is looked up
    machine.check_declared(entity_type, status)
    entity = await store.get_by_id(entity_type, entity_id)
    if entity is None:
        raise NotFound(entity_type.value, entity_id)

    previous = entity.status
    machine.check(entity_type, previous, status)

    fields: Dict[str, Any] = {"status": status}
    if payload is not UNSET:
        fields[PAYLOAD_FIELDS[entity_type]] = payload

    updated = await store.update(entity_type, entity_id, **fields)
    logger.info(
        f"{entity_type.value} {entity_id} status {previous} -> {status}"
        f"{' with payload' if payload is not UNSET else ''} at {updated.updated_at.isoformat()}"
    )
    return updated
