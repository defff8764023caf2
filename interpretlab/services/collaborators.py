"""
Extension points the catalog calls into.

Storing uploads, reading dataset files, running analyses and rendering charts
are not part of the catalog itself. Each is a small Protocol; the defaults
below cover local development and the HTTP upload/render endpoints.
"""
import logging
import os
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

import pandas as pd

from interpretlab.core.errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    file_path: str
    file_size: int


@dataclass(frozen=True)
class DatasetShape:
    columns: List[str]
    row_count: int


@dataclass(frozen=True)
class RenderedChart:
    chart_type: str
    config: Dict[str, Any] = field(default_factory=dict)
    data: Dict[str, Any] = field(default_factory=dict)


class FileStorage(Protocol):
    def save(self, name: str, content: bytes) -> StoredFile:
        ...


class DatasetIntrospector(Protocol):
    def introspect(self, file_path: str, file_type: str) -> DatasetShape:
        ...


class AnalysisExecutor(Protocol):
    """
    Runs an analysis outside the request and reports back through
    ``service.update_analysis_status(id, "completed" | "failed", results)``.
    """

    async def execute(self, analysis, model, dataset, service) -> None:
        ...


class VisualizationRenderer(Protocol):
    def render(self, analysis, chart_type: str) -> RenderedChart:
        ...


class LocalFileStorage:
    """Write uploads under a local directory as ``<uuid>_<name>``"""

    def __init__(self, upload_dir: str):
        self.upload_dir = upload_dir

    def save(self, name: str, content: bytes) -> StoredFile:
        os.makedirs(self.upload_dir, exist_ok=True)
        safe_name = f"{uuid.uuid4()}_{os.path.basename(name).replace(' ', '_')}"
        filepath = os.path.join(self.upload_dir, safe_name)
        with open(filepath, "wb") as buffer:
            buffer.write(content)
        logger.info(f"Stored upload {name} at {filepath} ({len(content)} bytes)")
        return StoredFile(file_path=filepath, file_size=os.path.getsize(filepath))


class PandasDatasetIntrospector:
    """Column names and row count of a CSV or JSON file"""

    def introspect(self, file_path: str, file_type: str) -> DatasetShape:
        try:
            if file_type == "csv":
                df = pd.read_csv(file_path, low_memory=False)
            elif file_type == "json":
                df = pd.read_json(file_path)
            else:
                raise ValidationError("file_type", f"unsupported file type '{file_type}'")
        except ValidationError:
            raise
        except Exception as e:
            raise ValidationError("file", f"could not read {file_type} file: {e}")

        # pandas column labels are not always strings
        return DatasetShape(columns=[str(col) for col in df.columns], row_count=int(len(df)))


SAMPLE_CHART_DATA: Dict[str, Dict[str, Any]] = {
    "feature_importance": {
        "labels": ["Feature A", "Feature B", "Feature C", "Feature D", "Feature E"],
        "values": [0.85, 0.72, 0.68, 0.45, 0.32],
    },
    "bias_detection": {
        "labels": ["Group 1", "Group 2", "Group 3", "Group 4"],
        "values": [0.12, 0.08, 0.15, 0.09],
    },
    "decision_path": {
        "nodes": ["Root", "Feature A > 0.5", "Feature B < 0.3", "Prediction"],
        "connections": [[0, 1], [1, 2], [2, 3]],
        "values": [1.0, 0.7, 0.4, 0.1],
    },
    "input_output_relationship": {
        "labels": ["Input 1", "Input 2", "Input 3", "Output"],
        "values": [0.6, 0.8, 0.4, 0.7],
    },
}


class PlaceholderRenderer:
    """
    Chart payload straight from the analysis results.

    An analysis without results gets a sample payload for its type, enough
    for a dashboard to draw something.
    """

    def render(self, analysis, chart_type: str) -> RenderedChart:
        results: Optional[Dict[str, Any]] = analysis.results
        if results:
            data = dict(results)
        else:
            data = dict(SAMPLE_CHART_DATA.get(analysis.analysis_type, {}))

        config = {
            "title": f"{chart_type.replace('_', ' ').upper()} - {analysis.name}",
            "xAxis": "Features" if analysis.analysis_type == "feature_importance" else "Elements",
            "yAxis": "Bias Score" if analysis.analysis_type == "bias_detection" else "Importance Score",
            "theme": "professional",
            "sample": not results,
        }
        return RenderedChart(chart_type=chart_type, config=config, data=data)
