"""Analysis engine: orchestrates the pipeline and assembles the result."""

from .engine import AnalysisEngine, analyze
from .models import ArchitectureAnalysisResult

__all__ = ["AnalysisEngine", "ArchitectureAnalysisResult", "analyze"]
