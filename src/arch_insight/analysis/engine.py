"""Architecture analysis engine.

Pipeline:
  Declarations → DeclarationIndex
              → Dependency graph (nodes, edges, package summaries)
              → Cycles
              → Layers, layer dependencies, violations, pattern
              → DDD roles and aggregates
              → ArchitectureAnalysisResult
"""

from collections.abc import Iterable
from typing import Optional

from ..architecture.analyzer import ArchitectureAnalyzer
from ..architecture.layers import LayerClassifier
from ..config import AnalysisConfig
from ..ddd.detector import DddRoleDetector
from ..declarations.index import DeclarationIndex
from ..declarations.models import DeclarationRef, Diagnostic
from ..graph.builder import DependencyGraphBuilder
from ..graph.cycles import CycleDetector
from ..logging_config import get_logger
from .models import ArchitectureAnalysisResult

logger = get_logger(__name__)


class AnalysisEngine:
    """Runs the full pipeline over one set of declarations."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def run(
        self,
        declarations: Iterable[DeclarationRef],
        include_raw_scores: Optional[bool] = None,
        collect_diagnostics: Optional[bool] = None,
        upstream_diagnostics: Optional[list[Diagnostic]] = None,
    ) -> ArchitectureAnalysisResult:
        """Analyze ``declarations``.

        Args:
            declarations: Declarations in upstream order
            include_raw_scores: Attach raw role scores (defaults to config)
            collect_diagnostics: Attach diagnostics (defaults to config)
            upstream_diagnostics: Diagnostics from loading, reported first

        Returns:
            ArchitectureAnalysisResult
        """
        config = self.config
        thresholds = config.thresholds
        if include_raw_scores is None:
            include_raw_scores = config.include_raw_scores
        if collect_diagnostics is None:
            collect_diagnostics = config.collect_diagnostics

        # Phase 1: Index
        index = DeclarationIndex.build(declarations)
        logger.debug(f"Indexed {len(index)} declarations")

        # Phase 2: Graph
        classifier = LayerClassifier()
        graph = DependencyGraphBuilder(index).build(package_layer=classifier.classify_package)

        # Phase 3: Cycles
        graph.cycles = CycleDetector(thresholds).detect(graph)
        logger.debug(f"Detected {len(graph.cycles)} cycles")

        # Phase 4: Layers, violations, pattern
        abstract_ids = [d.qualified_name for d in index if _is_abstract(d)]
        layered = ArchitectureAnalyzer(
            thresholds, detect_dependency_inversion=config.detect_dependency_inversion
        ).analyze(graph, abstract_ids=abstract_ids)

        # Phase 5: DDD roles
        detector = DddRoleDetector(index, thresholds)
        ddd = detector.detect()

        result = ArchitectureAnalysisResult(
            ddd_patterns=ddd,
            layered_architecture=layered,
            dependency_graph=graph,
        )
        if include_raw_scores:
            result.role_scores = detector.score_all()
        if collect_diagnostics:
            diagnostics = list(upstream_diagnostics or [])
            diagnostics.extend(d for d in index.diagnostics.entries if d not in diagnostics)
            result.diagnostics = diagnostics

        logger.info(
            f"Analyzed {len(graph.nodes)} declarations: {len(graph.edges)} edges, "
            f"{len(graph.cycles)} cycles, {len(layered.violations)} violations, "
            f"pattern={layered.pattern.value}"
        )
        return result


def _is_abstract(decl: DeclarationRef) -> bool:
    try:
        return decl.is_abstract
    except TypeError:
        return False


def analyze(
    declarations: Iterable[DeclarationRef],
    config: Optional[AnalysisConfig] = None,
    *,
    include_raw_scores: Optional[bool] = None,
    collect_diagnostics: Optional[bool] = None,
) -> ArchitectureAnalysisResult:
    """Analyze declarations and return the architecture picture.

    Never raises for malformed declarations; problems are logged and, when
    ``collect_diagnostics`` is set, reported in ``result.diagnostics``.

    Args:
        declarations: Declarations in upstream order
        config: Analysis configuration (defaults to AnalysisConfig())
        include_raw_scores: Attach per-declaration role scores
        collect_diagnostics: Attach diagnostics

    Returns:
        ArchitectureAnalysisResult
    """
    return AnalysisEngine(config).run(
        declarations,
        include_raw_scores=include_raw_scores,
        collect_diagnostics=collect_diagnostics,
    )
