"""Dependency graph: construction, cycle detection and package summaries."""

from .builder import DependencyGraphBuilder
from .cycles import CycleDetector, cycle_severity, group_cycles_by_severity
from .models import (
    CycleSeverity,
    DependencyCycle,
    DependencyEdge,
    DependencyGraph,
    DependencyNode,
    DependencyType,
    NodeType,
    PackageSummary,
)
from .packages import summarize_packages

__all__ = [
    "CycleDetector",
    "CycleSeverity",
    "DependencyCycle",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "DependencyNode",
    "DependencyType",
    "NodeType",
    "PackageSummary",
    "cycle_severity",
    "group_cycles_by_severity",
    "summarize_packages",
]
