"""Per-package summaries computed from the finished graph."""

from collections import defaultdict
from collections.abc import Callable
from typing import Optional

from .models import DependencyEdge, DependencyNode, PackageSummary


def summarize_packages(
    nodes: list[DependencyNode],
    edges: list[DependencyEdge],
    package_layer: Optional[Callable[[str], Optional[str]]] = None,
) -> list[PackageSummary]:
    """Group nodes by package and measure how tightly each package hangs together.

    Cohesion is the number of distinct ordered node pairs inside the package
    that are connected by at least one edge, divided by n(n-1). Packages
    with fewer than two nodes have cohesion 1.0.

    Args:
        nodes: Graph nodes
        edges: Graph edges
        package_layer: Optional callback mapping a package name to a layer

    Returns:
        One PackageSummary per package, sorted by package name
    """
    members: dict[str, list[str]] = defaultdict(list)
    package_of: dict[str, str] = {}
    for node in nodes:
        members[node.package_name].append(node.id)
        package_of[node.id] = node.package_name

    internal_pairs: dict[str, set[tuple[str, str]]] = defaultdict(set)
    external: dict[str, set[str]] = defaultdict(set)
    for edge in edges:
        source_pkg = package_of.get(edge.from_id)
        target_pkg = package_of.get(edge.to_id)
        if source_pkg is None or target_pkg is None:
            continue
        if source_pkg == target_pkg:
            internal_pairs[source_pkg].add((edge.from_id, edge.to_id))
        else:
            external[source_pkg].add(target_pkg)

    summaries = []
    for package in sorted(members):
        classes = sorted(members[package])
        n = len(classes)
        if n < 2:
            cohesion = 1.0
        else:
            cohesion = len(internal_pairs[package]) / (n * (n - 1))
        summaries.append(
            PackageSummary(
                package_name=package,
                classes=classes,
                dependencies=sorted(external[package]),
                layer=package_layer(package) if package_layer else None,
                cohesion=cohesion,
            )
        )
    return summaries
