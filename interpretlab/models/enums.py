"""Enumerations shared by the ORM, the schemas and the services."""
from enum import Enum


class EntityType(str, Enum):
    MODEL = "model"
    DATASET = "dataset"
    ANALYSIS = "analysis"
    VISUALIZATION = "visualization"


class ModelType(str, Enum):
    TRADITIONAL_ML = "traditional_ml"
    DEEP_LEARNING = "deep_learning"


class FileType(str, Enum):
    CSV = "csv"
    JSON = "json"


class AssetStatus(str, Enum):
    """Lifecycle of an uploaded model or dataset."""
    UPLOADING = "uploading"
    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


class AnalysisType(str, Enum):
    FEATURE_IMPORTANCE = "feature_importance"
    DECISION_PATH = "decision_path"
    BIAS_DETECTION = "bias_detection"
    INPUT_OUTPUT_RELATIONSHIP = "input_output_relationship"


class AnalysisStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class ChartType(str, Enum):
    BAR_CHART = "bar_chart"
    LINE_CHART = "line_chart"
    SCATTER_PLOT = "scatter_plot"
    HEATMAP = "heatmap"
    DECISION_TREE = "decision_tree"
    CONFUSION_MATRIX = "confusion_matrix"
