from typing import List, Optional
import os

from fastapi import APIRouter, Depends, File, Form, UploadFile

from interpretlab.api.deps import get_catalog_service, get_file_storage
from interpretlab.core.config import settings
from interpretlab.core.errors import ValidationError
from interpretlab.models.enums import AssetStatus
from interpretlab.schemas.base import ResponseModel
from interpretlab.schemas.analysis import AnalysisResponse
from interpretlab.schemas.model import ModelCreate, ModelResponse, ModelStatusUpdate
from interpretlab.services.catalog_service import CatalogService
from interpretlab.services.collaborators import FileStorage
from interpretlab.services.status_machine import UNSET

router = APIRouter()


@router.post("", response_model=ResponseModel[ModelResponse], status_code=201)
async def create_model(
    payload: ModelCreate,
    service: CatalogService = Depends(get_catalog_service)
):
    """Register a model whose file is already stored"""
    model = await service.create_model(payload)
    return ResponseModel(code=201, message="model created", data=ModelResponse.model_validate(model))


@router.post("/upload", response_model=ResponseModel[ModelResponse], status_code=201)
async def upload_model(
    file: UploadFile = File(...),
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    model_type: str = Form(...),
    framework: str = Form(...),
    service: CatalogService = Depends(get_catalog_service),
    storage: FileStorage = Depends(get_file_storage)
):
    """Store the model file, then register it"""
    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationError("file", f"larger than {settings.MAX_UPLOAD_SIZE} bytes")

    stored = storage.save(file.filename or "model.bin", content)
    try:
        model = await service.create_model({
            "name": name or file.filename,
            "description": description,
            "model_type": model_type,
            "framework": framework,
            "file_path": stored.file_path,
            "file_size": stored.file_size,
        })
    except Exception:
        # the row was not written, so the stored file is orphaned
        if os.path.exists(stored.file_path):
            os.remove(stored.file_path)
        raise
    return ResponseModel(code=201, message="model uploaded", data=ModelResponse.model_validate(model))


@router.get("", response_model=ResponseModel[List[ModelResponse]])
async def list_models(
    status: Optional[AssetStatus] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    models = await service.list_models(status=status.value if status else None)
    return ResponseModel(data=[ModelResponse.model_validate(m) for m in models])


@router.get("/{model_id}", response_model=ResponseModel[ModelResponse])
async def get_model(model_id: int, service: CatalogService = Depends(get_catalog_service)):
    """A missing model is not an error: data is null"""
    model = await service.get_model_by_id(model_id)
    if model is None:
        return ResponseModel(message="model not found", data=None)
    return ResponseModel(data=ModelResponse.model_validate(model))


@router.get("/{model_id}/analyses", response_model=ResponseModel[List[AnalysisResponse]])
async def list_model_analyses(model_id: int, service: CatalogService = Depends(get_catalog_service)):
    analyses = await service.list_analyses_by_model(model_id)
    return ResponseModel(data=[AnalysisResponse.model_validate(a) for a in analyses])


@router.patch("/{model_id}/status", response_model=ResponseModel[ModelResponse])
async def update_model_status(
    model_id: int,
    payload: ModelStatusUpdate,
    service: CatalogService = Depends(get_catalog_service)
):
    # an omitted metadata field keeps the stored value, an explicit null clears it
    metadata = payload.metadata if "metadata" in payload.model_fields_set else UNSET
    model = await service.update_model_status(model_id, payload.status, metadata)
    return ResponseModel(message="status updated", data=ModelResponse.model_validate(model))
