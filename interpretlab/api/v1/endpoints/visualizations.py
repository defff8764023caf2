from fastapi import APIRouter, Depends

from interpretlab.api.deps import get_catalog_service, get_visualization_renderer
from interpretlab.core.errors import InvalidReference
from interpretlab.schemas.base import ResponseModel
from interpretlab.schemas.visualization import (
    VisualizationCreate, VisualizationRenderRequest, VisualizationResponse
)
from interpretlab.services.catalog_service import CatalogService
from interpretlab.services.collaborators import VisualizationRenderer

router = APIRouter()


@router.post("", response_model=ResponseModel[VisualizationResponse], status_code=201)
async def create_visualization(
    payload: VisualizationCreate,
    service: CatalogService = Depends(get_catalog_service)
):
    """Attach a chart to an analysis; config and data are stored as given"""
    visualization = await service.create_visualization(payload)
    return ResponseModel(code=201, message="visualization created",
                         data=VisualizationResponse.model_validate(visualization))


@router.post("/render", response_model=ResponseModel[VisualizationResponse], status_code=201)
async def render_visualization(
    payload: VisualizationRenderRequest,
    service: CatalogService = Depends(get_catalog_service),
    renderer: VisualizationRenderer = Depends(get_visualization_renderer)
):
    """Build the chart from the analysis results, then attach it"""
    analysis = await service.get_analysis_by_id(payload.analysis_id)
    if analysis is None:
        raise InvalidReference("analysis", payload.analysis_id)

    chart = renderer.render(analysis, payload.chart_type)
    visualization = await service.create_visualization({
        "analysis_id": analysis.id,
        "chart_type": chart.chart_type,
        "config": chart.config,
        "data": chart.data,
    })
    return ResponseModel(code=201, message="visualization rendered",
                         data=VisualizationResponse.model_validate(visualization))


@router.get("/{visualization_id}", response_model=ResponseModel[VisualizationResponse])
async def get_visualization(visualization_id: int, service: CatalogService = Depends(get_catalog_service)):
    visualization = await service.get_visualization_by_id(visualization_id)
    if visualization is None:
        return ResponseModel(message="visualization not found", data=None)
    return ResponseModel(data=VisualizationResponse.model_validate(visualization))
