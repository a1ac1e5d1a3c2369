"""Layer dependency validation.

Checks every cross-layer edge against an explicit allowed-direction table
and turns dependency cycles into violations.
"""

from collections import defaultdict
from collections.abc import Iterable
from typing import Optional

from ..graph.models import DependencyCycle, DependencyGraph, NodeType
from ..logging_config import get_logger
from .models import ArchitectureViolation, LayerDependency, LayerType, ViolationType

logger = get_logger(__name__)

_P = LayerType.PRESENTATION.value
_A = LayerType.APPLICATION.value
_D = LayerType.DOMAIN.value
_DATA = LayerType.DATA.value
_I = LayerType.INFRASTRUCTURE.value

# Layers each layer may depend on besides itself
ALLOWED_DEPENDENCIES: dict[str, frozenset[str]] = {
    _P: frozenset({_A, _D, _I}),
    _A: frozenset({_D, _DATA, _I}),
    _D: frozenset({_I}),
    _DATA: frozenset({_D, _I}),
    _I: frozenset({_P, _A, _D, _DATA, _I}),
}

CIRCULAR_SUGGESTION = (
    "Circular dependency detected. Consider breaking the cycle by introducing "
    "interfaces or rearranging dependencies."
)


def is_allowed(from_layer: Optional[str], to_layer: Optional[str]) -> bool:
    """True if a dependency from ``from_layer`` to ``to_layer`` is permitted.

    Same-layer dependencies and dependencies touching an unclassified or
    unknown layer are always permitted.
    """
    if from_layer is None or to_layer is None or from_layer == to_layer:
        return True
    allowed = ALLOWED_DEPENDENCIES.get(from_layer)
    if allowed is None or to_layer not in ALLOWED_DEPENDENCIES:
        return True
    return to_layer in allowed


def layer_violation_suggestion(from_layer: str, to_layer: str) -> str:
    return (
        f"Layer '{from_layer}' should not depend on layer '{to_layer}'. "
        "Consider introducing an interface or moving the dependency to a proper layer."
    )


class LayerDependencyValidator:
    """Validates cross-layer edges of a layer-annotated graph.

    Args:
        detect_dependency_inversion: Also flag application -> data edges whose
            target is a concrete class
    """

    def __init__(self, detect_dependency_inversion: bool = True) -> None:
        self.detect_dependency_inversion = detect_dependency_inversion

    def validate(
        self,
        graph: DependencyGraph,
        cycles: Optional[list[DependencyCycle]] = None,
        abstract_ids: Iterable[str] = (),
    ) -> tuple[list[LayerDependency], list[ArchitectureViolation]]:
        """Aggregate layer dependencies and collect violations.

        Node layers must already be assigned (see LayerClassifier.assign).

        Args:
            graph: Graph with nodes, edges and layers
            cycles: Cycles to report; defaults to ``graph.cycles``
            abstract_ids: Ids of abstract classes; interfaces are recognised
                from the node type

        Returns:
            Tuple of (layer dependencies, violations)
        """
        layer_of = {node.id: node.layer for node in graph.nodes}
        abstract = set(abstract_ids)
        abstract.update(n.id for n in graph.nodes if n.node_type == NodeType.INTERFACE)

        edge_counts: dict[tuple[str, str], int] = defaultdict(int)
        violations: list[ArchitectureViolation] = []
        inversions: list[ArchitectureViolation] = []

        for edge in graph.edges:
            from_layer = layer_of.get(edge.from_id)
            to_layer = layer_of.get(edge.to_id)
            if from_layer is None or to_layer is None or from_layer == to_layer:
                continue
            edge_counts[(from_layer, to_layer)] += 1

            if not is_allowed(from_layer, to_layer):
                violations.append(
                    ArchitectureViolation(
                        from_class=edge.from_id,
                        to_class=edge.to_id,
                        violation_type=ViolationType.LAYER_VIOLATION,
                        suggestion=layer_violation_suggestion(from_layer, to_layer),
                    )
                )
            elif (
                self.detect_dependency_inversion
                and from_layer == _A
                and to_layer == _DATA
                and edge.to_id not in abstract
            ):
                inversions.append(
                    ArchitectureViolation(
                        from_class=edge.from_id,
                        to_class=edge.to_id,
                        violation_type=ViolationType.DEPENDENCY_INVERSION,
                        suggestion=(
                            f"'{edge.from_id}' depends on the concrete data class "
                            f"'{edge.to_id}'. Consider depending on an interface instead."
                        ),
                    )
                )

        dependencies = [
            LayerDependency(
                from_layer=from_layer,
                to_layer=to_layer,
                dependency_count=count,
                is_valid=is_allowed(from_layer, to_layer),
            )
            for (from_layer, to_layer), count in sorted(edge_counts.items())
        ]

        # Several edge types between one pair still describe one inversion
        seen_pairs: set[tuple[str, str]] = set()
        for violation in inversions:
            pair = (violation.from_class, violation.to_class)
            if pair not in seen_pairs:
                seen_pairs.add(pair)
                violations.append(violation)

        for cycle in graph.cycles if cycles is None else cycles:
            violations.extend(self._cycle_violations(cycle))

        if violations:
            logger.debug(f"Found {len(violations)} architecture violations")
        return dependencies, violations

    def _cycle_violations(self, cycle: DependencyCycle) -> list[ArchitectureViolation]:
        nodes = cycle.nodes
        if len(nodes) < 2:
            return []
        return [
            ArchitectureViolation(
                from_class=nodes[i],
                to_class=nodes[(i + 1) % len(nodes)],
                violation_type=ViolationType.CIRCULAR_DEPENDENCY,
                suggestion=CIRCULAR_SUGGESTION,
            )
            for i in range(len(nodes))
        ]
