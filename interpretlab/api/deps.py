"""Shared FastAPI dependencies"""
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from interpretlab.core.config import settings
from interpretlab.core.database import AsyncSessionLocal, get_db
from interpretlab.services.catalog_service import CatalogService
from interpretlab.services.collaborators import (
    AnalysisExecutor, DatasetIntrospector, FileStorage, LocalFileStorage,
    PandasDatasetIntrospector, PlaceholderRenderer, VisualizationRenderer
)


async def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_file_storage() -> FileStorage:
    return LocalFileStorage(settings.UPLOAD_DIR)


def get_dataset_introspector() -> DatasetIntrospector:
    return PandasDatasetIntrospector()


def get_visualization_renderer() -> VisualizationRenderer:
    return PlaceholderRenderer()


def get_session_factory():
    """Sessions for work that outlives the request, such as background tasks"""
    return AsyncSessionLocal


def get_analysis_executor() -> Optional[AnalysisExecutor]:
    """No executor ships with the catalog; analyses stay pending until updated"""
    return None
