"""ArchitectureAnalyzer.

Orchestrates:
1. Layer classification (node -> layer)
2. Layer dependency validation and violations
3. Pattern classification
"""

from __future__ import annotations

from collections.abc import Iterable

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..graph.models import DependencyGraph
from ..logging_config import get_logger
from .layers import LayerClassifier
from .models import LayeredArchitectureAnalysis
from .patterns import ArchitecturePatternClassifier
from .validation import LayerDependencyValidator

logger = get_logger(__name__)


class ArchitectureAnalyzer:
    """Produces the layered-architecture view of a dependency graph."""

    def __init__(
        self,
        thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
        detect_dependency_inversion: bool = True,
    ) -> None:
        self.classifier = LayerClassifier()
        self.validator = LayerDependencyValidator(detect_dependency_inversion)
        self.pattern_classifier = ArchitecturePatternClassifier(thresholds)

    def analyze(
        self, graph: DependencyGraph, abstract_ids: Iterable[str] = ()
    ) -> LayeredArchitectureAnalysis:
        """Classify layers, validate dependencies and pick a pattern.

        Sets ``layer`` on every node of ``graph``. Cycles are taken from
        ``graph.cycles``.

        Args:
            graph: Dependency graph with cycles already detected
            abstract_ids: Ids of abstract (non-interface) classes

        Returns:
            LayeredArchitectureAnalysis
        """
        layers = self.classifier.assign(graph)
        dependencies, violations = self.validator.validate(graph, abstract_ids=abstract_ids)
        pattern = self.pattern_classifier.classify(layers, dependencies)

        logger.debug(
            f"Architecture: {len(layers)} layers, {len(dependencies)} layer dependencies, "
            f"{len(violations)} violations"
        )

        return LayeredArchitectureAnalysis(
            layers=layers,
            dependencies=dependencies,
            violations=violations,
            pattern=pattern,
        )
