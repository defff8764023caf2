"""Dashboard summary"""
from pydantic import BaseModel
from typing import Dict


class CatalogSummary(BaseModel):
    """Per-status counts, computed from the store on every request"""
    models: Dict[str, int]
    datasets: Dict[str, int]
    analyses: Dict[str, int]
    visualizations: int
