from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Dict, Any

from interpretlab.models.enums import AnalysisStatus, AnalysisType


class AnalysisCreate(BaseModel):
    name: str = Field(..., min_length=1)
    model_id: int = Field(..., gt=0, strict=True)
    dataset_id: int = Field(..., gt=0, strict=True)
    analysis_type: AnalysisType
    parameters: Optional[Dict[str, Any]] = None

    class Config:
        use_enum_values = True
        protected_namespaces = ()


class AnalysisStatusUpdate(BaseModel):
    """Status update; results replace the stored value only when given"""
    status: AnalysisStatus
    results: Optional[Dict[str, Any]] = None

    class Config:
        use_enum_values = True


class AnalysisResponse(BaseModel):
    id: int
    name: str
    model_id: int
    dataset_id: int
    analysis_type: AnalysisType
    parameters: Optional[Dict[str, Any]] = None
    results: Optional[Dict[str, Any]] = None
    status: AnalysisStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        protected_namespaces = ()
