from pydantic import BaseModel, Field
from datetime import datetime
from typing import Dict, Any

from interpretlab.models.enums import ChartType


class VisualizationCreate(BaseModel):
    analysis_id: int = Field(..., gt=0, strict=True)
    chart_type: ChartType
    config: Dict[str, Any]
    data: Dict[str, Any]

    class Config:
        use_enum_values = True


class VisualizationRenderRequest(BaseModel):
    """Let the rendering collaborator build config/data from the analysis"""
    analysis_id: int = Field(..., gt=0, strict=True)
    chart_type: ChartType = ChartType.BAR_CHART

    class Config:
        use_enum_values = True


class VisualizationResponse(BaseModel):
    id: int
    analysis_id: int
    chart_type: ChartType
    config: Dict[str, Any]
    data: Dict[str, Any]
    created_at: datetime

    class Config:
        from_attributes = True
