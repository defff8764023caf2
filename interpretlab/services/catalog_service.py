"""Catalog operations: models, datasets, analyses and visualizations"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import pydantic
from sqlalchemy.ext.asyncio import AsyncSession

from interpretlab.core.config import settings
from interpretlab.core.errors import ValidationError
from interpretlab.models import Model, Dataset, Analysis, Visualization
from interpretlab.models.enums import AnalysisStatus, AssetStatus, EntityType
from interpretlab.schemas.analysis import AnalysisCreate
from interpretlab.schemas.dataset import DatasetCreate
from interpretlab.schemas.model import ModelCreate
from interpretlab.schemas.summary import CatalogSummary
from interpretlab.schemas.visualization import VisualizationCreate
from interpretlab.services.entity_store import EntityStore
from interpretlab.services.reference_validator import ReferenceValidator
from interpretlab.services.status_machine import UNSET, StatusMachine, apply_status, get_status_machine

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=pydantic.BaseModel)


def parse_input(schema: Type[S], data: Union[S, Dict[str, Any]]) -> S:
    """Validate a create payload, reporting problems as ValidationError."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        errors = [
            {"loc": [str(part) for part in err["loc"]], "msg": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        first = errors[0]
        raise ValidationError(".".join(first["loc"]) or "body", first["msg"], errors=errors)


def require_id(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(field, f"must be a positive integer, got {value!r}")
    return value


def require_map(field: str, value: Any) -> Any:
    """Status payloads are a map, null, or left out."""
    if value is UNSET or value is None or isinstance(value, dict):
        return value
    raise ValidationError(field, f"must be an object or null, got {type(value).__name__}")


class CatalogService:
    """
    Public operation surface of the catalog.

    Each operation is one short read-check-write sequence on a single
    session: references are validated, status changes go through the status
    machine, and the entity store does the writing.
    """

    def __init__(self, db: AsyncSession, status_machine: Optional[StatusMachine] = None):
        self.store = EntityStore(db)
        self.validator = ReferenceValidator(self.store)
        self.status_machine = status_machine or get_status_machine(settings.STATUS_MACHINE)

    # ---------------- Models ----------------

    async def create_model(self, data: Union[ModelCreate, Dict[str, Any]]) -> Model:
        payload = parse_input(ModelCreate, data)
        model = await self.store.create(
            EntityType.MODEL,
            name=payload.name,
            description=payload.description,
            model_type=payload.model_type,
            framework=payload.framework,
            file_path=payload.file_path,
            file_size=payload.file_size,
            status=AssetStatus.UPLOADING.value,
            metadata_=payload.metadata,
        )
        logger.info(f"Model {model.id} '{model.name}' registered ({model.model_type}, {model.framework})")
        return model

    async def list_models(self, status: Optional[str] = None) -> List[Model]:
        return await self.store.list(EntityType.MODEL, status=status)

    async def get_model_by_id(self, model_id: int) -> Optional[Model]:
        return await self.store.get_by_id(EntityType.MODEL, require_id("id", model_id))

    async def update_model_status(self, model_id: int, status: str, metadata: Any = UNSET) -> Model:
        return await apply_status(
            self.store, self.status_machine, EntityType.MODEL,
            require_id("id", model_id), status, require_map("metadata", metadata),
        )

    # ---------------- Datasets ----------------

    async def create_dataset(self, data: Union[DatasetCreate, Dict[str, Any]]) -> Dataset:
        payload = parse_input(DatasetCreate, data)
        dataset = await self.store.create(
            EntityType.DATASET,
            name=payload.name,
            description=payload.description,
            file_type=payload.file_type,
            file_path=payload.file_path,
            file_size=payload.file_size,
            columns=list(payload.columns),
            row_count=payload.row_count,
            status=AssetStatus.UPLOADING.value,
            metadata_=payload.metadata,
        )
        logger.info(f"Dataset {dataset.id} '{dataset.name}' registered ({dataset.row_count} rows)")
        return dataset

    async def list_datasets(self, status: Optional[str] = None) -> List[Dataset]:
        return await self.store.list(EntityType.DATASET, status=status)

    async def get_dataset_by_id(self, dataset_id: int) -> Optional[Dataset]:
        return await self.store.get_by_id(EntityType.DATASET, require_id("id", dataset_id))

    async def update_dataset_status(self, dataset_id: int, status: str, metadata: Any = UNSET) -> Dataset:
        return await apply_status(
            self.store, self.status_machine, EntityType.DATASET,
            require_id("id", dataset_id), status, require_map("metadata", metadata),
        )

    # ---------------- Analyses ----------------

    async def create_analysis(self, data: Union[AnalysisCreate, Dict[str, Any]]) -> Analysis:
        payload = parse_input(AnalysisCreate, data)
        # nothing is written when a reference is missing
        await self.validator.validate_analysis_refs(payload.model_id, payload.dataset_id)

        analysis = await self.store.create(
            EntityType.ANALYSIS,
            name=payload.name,
            model_id=payload.model_id,
            dataset_id=payload.dataset_id,
            analysis_type=payload.analysis_type,
            parameters=payload.parameters,
            results=None,
            status=AnalysisStatus.PENDING.value,
        )
        logger.info(
            f"Analysis {analysis.id} ({analysis.analysis_type}) created for "
            f"model {analysis.model_id} / dataset {analysis.dataset_id}"
        )
        return analysis

    async def list_analyses(
        self,
        status: Optional[str] = None,
        model_id: Optional[int] = None,
        dataset_id: Optional[int] = None,
    ) -> List[Analysis]:
        return await self.store.list(
            EntityType.ANALYSIS, status=status, model_id=model_id, dataset_id=dataset_id
        )

    async def get_analysis_by_id(self, analysis_id: int) -> Optional[Analysis]:
        return await self.store.get_by_id(EntityType.ANALYSIS, require_id("id", analysis_id))

    async def list_analyses_by_model(self, model_id: int) -> List[Analysis]:
        """Analyses of a model; an unknown model simply has none."""
        return await self.store.list_by_foreign_key(
            EntityType.ANALYSIS, "model_id", require_id("model_id", model_id)
        )

    async def update_analysis_status(self, analysis_id: int, status: str, results: Any = UNSET) -> Analysis:
        # completed usually comes with results, but that is up to the caller
        return await apply_status(
            self.store, self.status_machine, EntityType.ANALYSIS,
            require_id("id", analysis_id), status, require_map("results", results),
        )

    # ---------------- Visualizations ----------------

    async def create_visualization(self, data: Union[VisualizationCreate, Dict[str, Any]]) -> Visualization:
        payload = parse_input(VisualizationCreate, data)
        await self.validator.validate_visualization_ref(payload.analysis_id)

        visualization = await self.store.create(
            EntityType.VISUALIZATION,
            analysis_id=payload.analysis_id,
            chart_type=payload.chart_type,
            config=payload.config,
            data=payload.data,
        )
        logger.info(f"Visualization {visualization.id} ({visualization.chart_type}) added to analysis {visualization.analysis_id}")
        return visualization

    async def get_visualization_by_id(self, visualization_id: int) -> Optional[Visualization]:
        return await self.store.get_by_id(EntityType.VISUALIZATION, require_id("id", visualization_id))

    async def list_visualizations_by_analysis(self, analysis_id: int) -> List[Visualization]:
        return await self.store.list_by_foreign_key(
            EntityType.VISUALIZATION, "analysis_id", require_id("analysis_id", analysis_id)
        )

    # ---------------- Summary ----------------

    async def get_summary(self) -> CatalogSummary:
        async def counts(entity_type: EntityType, statuses) -> Dict[str, int]:
            found = await self.store.count_by_status(entity_type)
            return {s.value: found.get(s.value, 0) for s in statuses}

        return CatalogSummary(
            models=await counts(EntityType.MODEL, AssetStatus),
            datasets=await counts(EntityType.DATASET, AssetStatus),
            analyses=await counts(EntityType.ANALYSIS, AnalysisStatus),
            visualizations=await self.store.count(EntityType.VISUALIZATION),
        )
