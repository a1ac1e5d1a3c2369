"""Architecture analysis: layer inference, dependency validation, pattern classification."""

from .analyzer import ArchitectureAnalyzer
from .layers import LayerClassifier
from .models import (
    ArchitectureLayer,
    ArchitecturePattern,
    ArchitectureViolation,
    LayerDependency,
    LayeredArchitectureAnalysis,
    LayerType,
    ViolationType,
)
from .patterns import ArchitecturePatternClassifier
from .validation import LayerDependencyValidator, is_allowed

__all__ = [
    "ArchitectureAnalyzer",
    "ArchitectureLayer",
    "ArchitecturePattern",
    "ArchitecturePatternClassifier",
    "ArchitectureViolation",
    "LayerClassifier",
    "LayerDependency",
    "LayerDependencyValidator",
    "LayerType",
    "LayeredArchitectureAnalysis",
    "ViolationType",
    "is_allowed",
]
