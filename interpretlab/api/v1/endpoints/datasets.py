from typing import List, Optional
from pathlib import Path
import os

from fastapi import APIRouter, Depends, File, Form, UploadFile

from interpretlab.api.deps import get_catalog_service, get_dataset_introspector, get_file_storage
from interpretlab.core.config import settings
from interpretlab.core.errors import ValidationError
from interpretlab.models.enums import AssetStatus, FileType
from interpretlab.schemas.base import ResponseModel
from interpretlab.schemas.dataset import DatasetCreate, DatasetResponse, DatasetStatusUpdate
from interpretlab.services.catalog_service import CatalogService
from interpretlab.services.collaborators import DatasetIntrospector, FileStorage
from interpretlab.services.status_machine import UNSET

router = APIRouter()


@router.post("", response_model=ResponseModel[DatasetResponse], status_code=201)
async def create_dataset(
    payload: DatasetCreate,
    service: CatalogService = Depends(get_catalog_service)
):
    dataset = await service.create_dataset(payload)
    return ResponseModel(code=201, message="dataset created", data=DatasetResponse.model_validate(dataset))


@router.post("/upload", response_model=ResponseModel[DatasetResponse], status_code=201)
async def upload_dataset(
    file: UploadFile = File(...),
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    service: CatalogService = Depends(get_catalog_service),
    storage: FileStorage = Depends(get_file_storage),
    introspector: DatasetIntrospector = Depends(get_dataset_introspector)
):
    """Store a CSV/JSON file, read its columns and row count, register it"""
    ext = Path(file.filename or "").suffix.lower().lstrip(".")
    if ext not in [t.value for t in FileType]:
        raise ValidationError("file", "only .csv and .json files are supported")

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationError("file", f"larger than {settings.MAX_UPLOAD_SIZE} bytes")

    stored = storage.save(file.filename, content)
    try:
        shape = introspector.introspect(stored.file_path, ext)
        dataset = await service.create_dataset({
            "name": name or file.filename,
            "description": description,
            "file_type": ext,
            "file_path": stored.file_path,
            "file_size": stored.file_size,
            "columns": shape.columns,
            "row_count": shape.row_count,
        })
    except Exception:
        # the row was not written, so the stored file is orphaned
        if os.path.exists(stored.file_path):
            os.remove(stored.file_path)
        raise
    return ResponseModel(code=201, message="dataset uploaded", data=DatasetResponse.model_validate(dataset))


@router.get("", response_model=ResponseModel[List[DatasetResponse]])
async def list_datasets(
    status: Optional[AssetStatus] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    datasets = await service.list_datasets(status=status.value if status else None)
    return ResponseModel(data=[DatasetResponse.model_validate(d) for d in datasets])


@router.get("/{dataset_id}", response_model=ResponseModel[DatasetResponse])
async def get_dataset(dataset_id: int, service: CatalogService = Depends(get_catalog_service)):
    dataset = await service.get_dataset_by_id(dataset_id)
    if dataset is None:
        return ResponseModel(message="dataset not found", data=None)
    return ResponseModel(data=DatasetResponse.model_validate(dataset))


@router.patch("/{dataset_id}/status", response_model=ResponseModel[DatasetResponse])
async def update_dataset_status(
    dataset_id: int,
    payload: DatasetStatusUpdate,
    service: CatalogService = Depends(get_catalog_service)
):
    metadata = payload.metadata if "metadata" in payload.model_fields_set else UNSET
    dataset = await service.update_dataset_status(dataset_id, payload.status, metadata)
    return ResponseModel(message="status updated", data=DatasetResponse.model_validate(dataset))
