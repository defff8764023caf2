"""Keyed storage for the four catalog entities"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from interpretlab.core.errors import NotFound
from interpretlab.models import Model, Dataset, Analysis, Visualization
from interpretlab.models.enums import EntityType

logger = logging.getLogger(__name__)

ENTITY_CLASSES = {
    EntityType.MODEL: Model,
    EntityType.DATASET: Dataset,
    EntityType.ANALYSIS: Analysis,
    EntityType.VISUALIZATION: Visualization,
}

FOREIGN_KEYS = {
    EntityType.MODEL: (),
    EntityType.DATASET: (),
    EntityType.ANALYSIS: ("model_id", "dataset_id"),
    EntityType.VISUALIZATION: ("analysis_id",),
}

# entities without updated_at cannot be changed after creation
IMMUTABLE = {EntityType.VISUALIZATION}


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class EntityStore:
    """
    Create/get/list/update by primary key and by foreign key.

    The store assigns ids and timestamps. Opaque JSON fields are written and
    read back as given; the store never looks inside them.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, entity_type: EntityType, **fields: Any):
        entity_type = EntityType(entity_type)
        cls = ENTITY_CLASSES[entity_type]
        now = utcnow()
        fields["created_at"] = now
        if entity_type not in IMMUTABLE:
            fields["updated_at"] = now

        entity = cls(**fields)
        self.db.add(entity)
        await self.db.commit()
        await self.db.refresh(entity)
        logger.debug(f"Created {entity_type.value} {entity.id}")
        return entity

    async def get_by_id(self, entity_type: EntityType, entity_id: int):
        cls = ENTITY_CLASSES[EntityType(entity_type)]
        return await self.db.get(cls, entity_id)

    async def list(self, entity_type: EntityType, **filters: Any) -> List[Any]:
        """All rows of a type ordered by id; None-valued filters are skipped."""
        cls = ENTITY_CLASSES[EntityType(entity_type)]
        query = select(cls)
        for field, value in filters.items():
            if value is not None:
                query = query.where(getattr(cls, field) == value)
        result = await self.db.execute(query.order_by(cls.id))
        return list(result.scalars().all())

    async def list_by_foreign_key(self, entity_type: EntityType, fk_field: str, fk_value: int) -> List[Any]:
        entity_type = EntityType(entity_type)
        if fk_field not in FOREIGN_KEYS[entity_type]:
            raise ValueError(f"{fk_field} is not a foreign key of {entity_type.value}")
        cls = ENTITY_CLASSES[entity_type]
        result = await self.db.execute(
            select(cls).where(getattr(cls, fk_field) == fk_value).order_by(cls.id)
        )
        return list(result.scalars().all())

    async def update(self, entity_type: EntityType, entity_id: int, **fields: Any):
        entity_type = EntityType(entity_type)
        if entity_type in IMMUTABLE:
            raise ValueError(f"{entity_type.value} entities cannot be updated")

        entity = await self.get_by_id(entity_type, entity_id)
        if entity is None:
            raise NotFound(entity_type.value, entity_id)

        for field, value in fields.items():
            setattr(entity, field, value)

        now = utcnow()
        # two updates within one clock tick must still be ordered
        if entity.updated_at is not None and now <= entity.updated_at:
            now = entity.updated_at + timedelta(microseconds=1)
        entity.updated_at = now

        await self.db.commit()
        await self.db.refresh(entity)
        return entity

    async def count_by_status(self, entity_type: EntityType) -> Dict[str, int]:
        cls = ENTITY_CLASSES[EntityType(entity_type)]
        result = await self.db.execute(
            select(cls.status, func.count(cls.id)).group_by(cls.status)
        )
        return {status: count for status, count in result.all()}

    async def count(self, entity_type: EntityType) -> int:
        cls = ENTITY_CLASSES[EntityType(entity_type)]
        result = await self.db.execute(select(func.count(cls.id)))
        return result.scalar() or 0
