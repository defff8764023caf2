"""Schemas for uploaded models"""
from pydantic import AliasChoices, BaseModel, Field
from datetime import datetime
from typing import Optional, Dict, Any

from interpretlab.models.enums import AssetStatus, ModelType


class ModelCreate(BaseModel):
    """Register a model; status always starts at uploading"""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    model_type: ModelType
    framework: str = Field(..., min_length=1)  # scikit-learn, pytorch, ...
    file_path: str = Field(..., min_length=1)
    file_size: int = Field(..., gt=0)
    metadata: Optional[Dict[str, Any]] = None

    class Config:
        use_enum_values = True
        protected_namespaces = ()


class ModelStatusUpdate(BaseModel):
    """Status update; leave metadata out to keep the stored value"""
    status: AssetStatus
    metadata: Optional[Dict[str, Any]] = None

    class Config:
        use_enum_values = True


class ModelResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    model_type: ModelType
    framework: str
    file_path: str
    file_size: int
    status: AssetStatus
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("metadata_", "metadata")
    )
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        protected_namespaces = ()
