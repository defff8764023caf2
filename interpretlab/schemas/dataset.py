from pydantic import AliasChoices, BaseModel, Field
from datetime import datetime
from typing import List, Optional, Dict, Any

from interpretlab.models.enums import AssetStatus, FileType


class DatasetCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    file_type: FileType
    file_path: str = Field(..., min_length=1)
    file_size: int = Field(..., gt=0)
    columns: List[str]
    row_count: int = Field(..., ge=0)
    metadata: Optional[Dict[str, Any]] = None

    class Config:
        use_enum_values = True


class DatasetStatusUpdate(BaseModel):
    status: AssetStatus
    metadata: Optional[Dict[str, Any]] = None

    class Config:
        use_enum_values = True


class DatasetResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    file_type: FileType
    file_path: str
    file_size: int
    columns: List[str]
    row_count: int
    status: AssetStatus
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("metadata_", "metadata")
    )
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
