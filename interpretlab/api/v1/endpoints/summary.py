from fastapi import APIRouter, Depends

from interpretlab.api.deps import get_catalog_service
from interpretlab.schemas.base import ResponseModel
from interpretlab.schemas.summary import CatalogSummary
from interpretlab.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=ResponseModel[CatalogSummary])
async def get_summary(service: CatalogService = Depends(get_catalog_service)):
    """Status counts for the dashboard"""
    return ResponseModel(data=await service.get_summary())
