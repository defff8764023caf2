from interpretlab.models.models import Model, Dataset, Analysis, Visualization

__all__ = ["Model", "Dataset", "Analysis", "Visualization"]
