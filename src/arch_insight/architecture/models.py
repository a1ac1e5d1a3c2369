"""Architecture analysis models.

Layers are inferred per node from naming conventions; layer dependencies and
violations are derived from the dependency graph.
"""

from dataclasses import dataclass, field
from enum import Enum


class LayerType(Enum):
    """Canonical layers. ``level`` orders them from the outside in."""

    PRESENTATION = "presentation"
    APPLICATION = "application"
    DOMAIN = "domain"
    DATA = "data"
    INFRASTRUCTURE = "infrastructure"

    @property
    def level(self) -> int:
        return LAYER_LEVELS[self]


LAYER_LEVELS = {
    LayerType.PRESENTATION: 1,
    LayerType.APPLICATION: 2,
    LayerType.DOMAIN: 3,
    LayerType.DATA: 4,
    LayerType.INFRASTRUCTURE: 4,
}


class ArchitecturePattern(Enum):
    LAYERED = "layered"
    HEXAGONAL = "hexagonal"
    CLEAN = "clean"
    ONION = "onion"
    UNKNOWN = "unknown"


class ViolationType(Enum):
    """Types of architecture violations."""

    LAYER_VIOLATION = "layer_violation"  # edge against the allowed direction
    CIRCULAR_DEPENDENCY = "circular_dependency"  # consecutive pair of a cycle
    DEPENDENCY_INVERSION = "dependency_inversion"  # application -> concrete data class


@dataclass
class ArchitectureLayer:
    """One inferred layer and its member nodes."""

    name: str
    layer_type: LayerType
    level: int
    classes: list[str] = field(default_factory=list)  # node ids
    packages: list[str] = field(default_factory=list)


@dataclass
class LayerDependency:
    """Aggregated edges from one known layer to another."""

    from_layer: str
    to_layer: str
    dependency_count: int = 0
    is_valid: bool = True


@dataclass
class ArchitectureViolation:
    from_class: str
    to_class: str
    violation_type: ViolationType
    suggestion: str = ""


@dataclass
class LayeredArchitectureAnalysis:
    """Top-level result of layer analysis."""

    layers: list[ArchitectureLayer] = field(default_factory=list)
    dependencies: list[LayerDependency] = field(default_factory=list)
    violations: list[ArchitectureViolation] = field(default_factory=list)
    pattern: ArchitecturePattern = ArchitecturePattern.UNKNOWN
