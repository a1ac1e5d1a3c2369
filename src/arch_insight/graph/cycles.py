"""Cycle detection on the dependency graph.

Depth-first traversal with an explicit stack. A back edge to a node on the
current path closes a cycle made of the path from that node onward. Nodes and
successors are visited in sorted order, so the same graph always yields the
same cycles regardless of declaration order.
"""

from collections import defaultdict

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from .models import CycleSeverity, DependencyCycle, DependencyGraph

logger = get_logger(__name__)


def cycle_severity(length: int, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> CycleSeverity:
    """Classify a cycle by its length."""
    if length <= thresholds.cycle_low_max_length:
        return CycleSeverity.LOW
    if length <= thresholds.cycle_medium_max_length:
        return CycleSeverity.MEDIUM
    return CycleSeverity.HIGH


class CycleDetector:
    """Finds circular reference chains between graph nodes."""

    def __init__(self, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def detect(self, graph: DependencyGraph) -> list[DependencyCycle]:
        """Find cycles in ``graph``.

        Each distinct node set is reported once. Self-loops and parallel
        edges never form a cycle on their own.

        Args:
            graph: Graph with nodes and edges populated

        Returns:
            Cycles in discovery order
        """
        return self.detect_in(graph.adjacency())

    def detect_in(self, adjacency: dict[str, list[str]]) -> list[DependencyCycle]:
        """Find cycles in a plain adjacency mapping (node -> successors)."""
        successors = {node: sorted(set(targets)) for node, targets in adjacency.items()}
        visited: set[str] = set()
        seen_sets: set[frozenset[str]] = set()
        cycles: list[DependencyCycle] = []

        for root in sorted(successors):
            if root in visited:
                continue

            path: list[str] = [root]
            position: dict[str, int] = {root: 0}
            visited.add(root)
            # Explicit call stack: each frame is (node, successor iterator)
            call_stack = [(root, iter(successors.get(root, [])))]

            while call_stack:
                node, it = call_stack[-1]
                pushed = False
                for succ in it:
                    if succ == node:
                        continue
                    if succ in position:
                        # Back edge: path from the successor's first occurrence
                        found = path[position[succ] :]
                        key = frozenset(found)
                        if len(key) >= 2 and key not in seen_sets:
                            seen_sets.add(key)
                            cycles.append(
                                DependencyCycle(
                                    nodes=list(found),
                                    severity=cycle_severity(len(found), self.thresholds),
                                )
                            )
                        continue
                    if succ in visited:
                        continue
                    visited.add(succ)
                    position[succ] = len(path)
                    path.append(succ)
                    call_stack.append((succ, iter(successors.get(succ, []))))
                    pushed = True
                    break

                if not pushed:
                    call_stack.pop()
                    path.pop()
                    del position[node]

        if cycles:
            logger.debug(f"Found {len(cycles)} dependency cycles")
        return cycles


def group_cycles_by_severity(
    cycles: list[DependencyCycle],
) -> dict[CycleSeverity, list[DependencyCycle]]:
    """Group cycles by severity, HIGH first. Empty severities are omitted."""
    grouped: dict[CycleSeverity, list[DependencyCycle]] = defaultdict(list)
    for cycle in cycles:
        grouped[cycle.severity].append(cycle)
    order = [CycleSeverity.HIGH, CycleSeverity.MEDIUM, CycleSeverity.LOW]
    return {severity: grouped[severity] for severity in order if grouped.get(severity)}
