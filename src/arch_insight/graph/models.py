"""Dependency graph models.

Nodes are type declarations, edges are typed references between them:
inheritance, composition (fields) and usage (method signatures).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class NodeType(Enum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    OBJECT = "object"


class DependencyType(Enum):
    """Kind of reference; ``weight`` is the strength of a single reference."""

    INHERITANCE = "inheritance"
    COMPOSITION = "composition"
    USAGE = "usage"

    @property
    def weight(self) -> int:
        return _WEIGHTS[self]


_WEIGHTS = {
    DependencyType.INHERITANCE: 3,
    DependencyType.COMPOSITION: 2,
    DependencyType.USAGE: 1,
}


class CycleSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ── Graph elements ─────────────────────────────────────────────────


@dataclass
class DependencyNode:
    id: str  # package.ClassName
    class_name: str
    package_name: str
    file_name: str
    language: str
    node_type: NodeType = NodeType.CLASS
    layer: Optional[str] = None  # set by layer classification


@dataclass
class DependencyEdge:
    """All references of one type from one node to another.

    ``strength`` is the type's weight times the number of references.
    """

    from_id: str
    to_id: str
    dependency_type: DependencyType
    strength: int = 1


# ── Derived structures ─────────────────────────────────────────────


@dataclass
class DependencyCycle:
    """A closed reference chain; the start node is not repeated at the end."""

    nodes: list[str]
    severity: CycleSeverity = CycleSeverity.LOW

    @property
    def length(self) -> int:
        return len(self.nodes)


@dataclass
class PackageSummary:
    package_name: str
    classes: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)  # other packages depended on
    layer: Optional[str] = None
    cohesion: float = 1.0  # internal node pairs / n(n-1)


@dataclass
class DependencyGraph:
    """Nodes, edges and derived structures for one run."""

    nodes: list[DependencyNode] = field(default_factory=list)
    edges: list[DependencyEdge] = field(default_factory=list)
    cycles: list[DependencyCycle] = field(default_factory=list)
    packages: list[PackageSummary] = field(default_factory=list)

    def node(self, node_id: str) -> Optional[DependencyNode]:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def adjacency(self) -> dict[str, list[str]]:
        """Sorted, de-duplicated successor ids for every node."""
        adj: dict[str, set[str]] = {n.id: set() for n in self.nodes}
        for edge in self.edges:
            adj.setdefault(edge.from_id, set()).add(edge.to_id)
        return {k: sorted(v) for k, v in sorted(adj.items())}
