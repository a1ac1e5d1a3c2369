"""
arch-insight - Architecture analysis for object-oriented codebases

Builds a typed dependency graph from language-neutral type declarations,
finds dependency cycles, infers layers and checks their dependencies,
classifies the overall architecture pattern and recognises Domain-Driven
Design roles with confidence scores.
"""

__version__ = "0.1.0"

from .analysis.models import ArchitectureAnalysisResult
from .api import analyze, analyze_file
from .config import AnalysisConfig, ThresholdConfig, load_config
from .declarations import DeclarationKind, DeclarationRef, FieldDecl, MethodDecl

__all__ = [
    "analyze",  # Main entry point
    "analyze_file",
    "ArchitectureAnalysisResult",
    "AnalysisConfig",
    "ThresholdConfig",
    "load_config",
    "DeclarationKind",
    "DeclarationRef",
    "FieldDecl",
    "MethodDecl",
]
