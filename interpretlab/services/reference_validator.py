"""Create-time foreign key checks"""
import logging

from interpretlab.core.errors import InvalidReference
from interpretlab.models.enums import EntityType
from interpretlab.services.entity_store import EntityStore

logger = logging.getLogger(__name__)


class ReferenceValidator:
    """
    Resolve parent keys before a child row is written.

    Only creation is guarded: reads and updates of an analysis or
    visualization never re-check their parents.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    async def _require(self, entity_type: EntityType, entity_id: int):
        if await self.store.get_by_id(entity_type, entity_id) is None:
            logger.info(f"Rejected reference to missing {entity_type.value} {entity_id}")
            raise InvalidReference(entity_type.value, entity_id)

    async def validate_analysis_refs(self, model_id: int, dataset_id: int):
        # model first: when both are missing only the model is reported
        await self._require(EntityType.MODEL, model_id)
        await self._require(EntityType.DATASET, dataset_id)

    async def validate_visualization_ref(self, analysis_id: int):
        await self._require(EntityType.ANALYSIS, analysis_id)
