"""Analysis API"""
from typing import List, Optional
import logging

from fastapi import APIRouter, BackgroundTasks, Depends

from interpretlab.api.deps import get_analysis_executor, get_catalog_service, get_session_factory
from interpretlab.models.enums import AnalysisStatus
from interpretlab.schemas.base import ResponseModel
from interpretlab.schemas.analysis import AnalysisCreate, AnalysisResponse, AnalysisStatusUpdate
from interpretlab.schemas.visualization import VisualizationResponse
from interpretlab.services.catalog_service import CatalogService
from interpretlab.services.collaborators import AnalysisExecutor
from interpretlab.services.status_machine import UNSET

logger = logging.getLogger(__name__)

router = APIRouter()


async def execute_analysis_task(executor: AnalysisExecutor, session_factory, analysis_id: int):
    """
    Hand a new analysis to the executor.

    Runs after the response is sent, so it opens its own session. An executor
    that raises leaves the analysis failed with the error in its results.
    """
    async with session_factory() as db:
        service = CatalogService(db)
        analysis = await service.get_analysis_by_id(analysis_id)
        if analysis is None:
            logger.error(f"Analysis {analysis_id} vanished before execution")
            return
        model = await service.get_model_by_id(analysis.model_id)
        dataset = await service.get_dataset_by_id(analysis.dataset_id)

        logger.info(f"Starting analysis {analysis_id} ({analysis.analysis_type})")
        try:
            await executor.execute(analysis, model, dataset, service)
        except Exception as e:
            logger.exception(f"Analysis {analysis_id} failed: {e}")
            await service.update_analysis_status(
                analysis_id, AnalysisStatus.FAILED.value, {"error": str(e)}
            )


@router.post("", response_model=ResponseModel[AnalysisResponse], status_code=201)
async def create_analysis(
    payload: AnalysisCreate,
    background_tasks: BackgroundTasks,
    service: CatalogService = Depends(get_catalog_service),
    executor: Optional[AnalysisExecutor] = Depends(get_analysis_executor),
    session_factory=Depends(get_session_factory)
):
    """
    Create an analysis in pending state.

    Analysis types:
    - feature_importance
    - decision_path
    - bias_detection
    - input_output_relationship
    """
    analysis = await service.create_analysis(payload)
    # serialize before the background task can touch the row
    data = AnalysisResponse.model_validate(analysis)

    if executor is not None:
        background_tasks.add_task(execute_analysis_task, executor, session_factory, analysis.id)

    return ResponseModel(code=201, message="analysis created", data=data)


@router.get("", response_model=ResponseModel[List[AnalysisResponse]])
async def list_analyses(
    status: Optional[AnalysisStatus] = None,
    model_id: Optional[int] = None,
    dataset_id: Optional[int] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    analyses = await service.list_analyses(
        status=status.value if status else None, model_id=model_id, dataset_id=dataset_id
    )
    return ResponseModel(data=[AnalysisResponse.model_validate(a) for a in analyses])


@router.get("/{analysis_id}", response_model=ResponseModel[AnalysisResponse])
async def get_analysis(analysis_id: int, service: CatalogService = Depends(get_catalog_service)):
    analysis = await service.get_analysis_by_id(analysis_id)
    if analysis is None:
        return ResponseModel(message="analysis not found", data=None)
    return ResponseModel(data=AnalysisResponse.model_validate(analysis))


@router.get("/{analysis_id}/visualizations", response_model=ResponseModel[List[VisualizationResponse]])
async def list_analysis_visualizations(analysis_id: int, service: CatalogService = Depends(get_catalog_service)):
    visualizations = await service.list_visualizations_by_analysis(analysis_id)
    return ResponseModel(data=[VisualizationResponse.model_validate(v) for v in visualizations])


@router.patch("/{analysis_id}/status", response_model=ResponseModel[AnalysisResponse])
async def update_analysis_status(
    analysis_id: int,
    payload: AnalysisStatusUpdate,
    service: CatalogService = Depends(get_catalog_service)
):
    """Called by whatever runs the analysis, e.g. running -> completed with results"""
    results = payload.results if "results" in payload.model_fields_set else UNSET
    analysis = await service.update_analysis_status(analysis_id, payload.status, results)
    return ResponseModel(message="status updated", data=AnalysisResponse.model_validate(analysis))
