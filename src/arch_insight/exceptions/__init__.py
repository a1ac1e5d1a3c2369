"""Exception hierarchy for arch-insight."""

from .analysis import AnalysisError, DeclarationExtractionError, InputFileError
from .base import ArchInsightError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "ArchInsightError",
    "AnalysisError",
    "DeclarationExtractionError",
    "InputFileError",
    "ConfigurationError",
    "InvalidConfigError",
]
