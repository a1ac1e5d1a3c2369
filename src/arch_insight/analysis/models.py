"""Result model of one architecture analysis run."""

from dataclasses import dataclass, field

from ..architecture.models import LayeredArchitectureAnalysis
from ..ddd.models import DddPatternAnalysis, RoleScores
from ..declarations.models import Diagnostic
from ..graph.models import DependencyGraph


@dataclass
class ArchitectureAnalysisResult:
    """Everything the engine produces for one set of declarations.

    ``role_scores`` and ``diagnostics`` stay empty unless requested.
    """

    ddd_patterns: DddPatternAnalysis = field(default_factory=DddPatternAnalysis)
    layered_architecture: LayeredArchitectureAnalysis = field(
        default_factory=LayeredArchitectureAnalysis
    )
    dependency_graph: DependencyGraph = field(default_factory=DependencyGraph)
    role_scores: list[RoleScores] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
