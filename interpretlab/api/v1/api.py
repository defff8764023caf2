from fastapi import APIRouter
from interpretlab.api.v1.endpoints import models, datasets, analyses, visualizations, summary

api_router = APIRouter()
api_router.include_router(models.router, prefix="/models", tags=["models"])
api_router.include_router(datasets.router, prefix="/datasets", tags=["datasets"])
api_router.include_router(analyses.router, prefix="/analyses", tags=["analyses"])
api_router.include_router(visualizations.router, prefix="/visualizations", tags=["visualizations"])
api_router.include_router(summary.router, prefix="/summary", tags=["summary"])
