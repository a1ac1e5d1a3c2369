"""Overall architecture pattern classification.

Markers are the layer names plus every segment of every member package, so
``com.shop.adapter.rest`` contributes ``adapter`` even though it is filed
under the infrastructure layer.

Checked in order, first match wins: HEXAGONAL, CLEAN, ONION, LAYERED,
otherwise UNKNOWN.
"""

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from .layers import segment_matches
from .models import (
    LAYER_LEVELS,
    ArchitectureLayer,
    ArchitecturePattern,
    LayerDependency,
    LayerType,
)

logger = get_logger(__name__)

_LEVEL_BY_NAME = {layer_type.value: level for layer_type, level in LAYER_LEVELS.items()}
_OUTER_LEVEL = 4


def collect_markers(layers: list[ArchitectureLayer]) -> set[str]:
    """Lower-cased layer names and package segments of all layer members."""
    markers: set[str] = set()
    for layer in layers:
        markers.add(layer.name.lower())
        for package in layer.packages:
            markers.update(s.lower() for s in package.split(".") if s)
    return markers


def _has_marker(markers: set[str], *keywords: str) -> bool:
    return any(segment_matches(m, kw) for m in markers for kw in keywords)


class ArchitecturePatternClassifier:
    """Chooses one ArchitecturePattern for a layered analysis."""

    def __init__(self, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def classify(
        self, layers: list[ArchitectureLayer], dependencies: list[LayerDependency]
    ) -> ArchitecturePattern:
        """Classify the architecture.

        Args:
            layers: Non-empty inferred layers
            dependencies: Aggregated cross-layer dependencies

        Returns:
            The first matching pattern
        """
        markers = collect_markers(layers)
        present = {layer.name for layer in layers}

        if self._is_hexagonal(markers, present, dependencies):
            pattern = ArchitecturePattern.HEXAGONAL
        elif self._is_clean(markers, present):
            pattern = ArchitecturePattern.CLEAN
        elif self._is_onion(present, dependencies):
            pattern = ArchitecturePattern.ONION
        elif len(present) >= self.thresholds.layered_min_layers:
            pattern = ArchitecturePattern.LAYERED
        else:
            pattern = ArchitecturePattern.UNKNOWN

        logger.debug(f"Architecture pattern: {pattern.value} (layers={sorted(present)})")
        return pattern

    def _is_hexagonal(
        self, markers: set[str], present: set[str], dependencies: list[LayerDependency]
    ) -> bool:
        if not _has_marker(markers, "port", "adapter"):
            return False
        domain = LayerType.DOMAIN.value
        if domain not in present:
            return True
        domain_targets = {
            d.to_layer
            for d in dependencies
            if d.from_layer == domain and d.to_layer != domain and d.dependency_count > 0
        }
        return len(domain_targets) <= self.thresholds.hexagonal_max_domain_dependencies

    def _is_clean(self, markers: set[str], present: set[str]) -> bool:
        has_use_cases = _has_marker(markers, "usecase", "interactor")
        has_entities = LayerType.DOMAIN.value in present or _has_marker(markers, "entity")
        has_frameworks = LayerType.INFRASTRUCTURE.value in present or _has_marker(
            markers, "framework"
        )
        return has_use_cases and has_entities and has_frameworks

    def _is_onion(self, present: set[str], dependencies: list[LayerDependency]) -> bool:
        required = {
            LayerType.DOMAIN.value,
            LayerType.APPLICATION.value,
            LayerType.INFRASTRUCTURE.value,
        }
        if not required <= present:
            return False

        total = 0
        inward = 0
        for dep in dependencies:
            from_level = _LEVEL_BY_NAME.get(dep.from_layer)
            to_level = _LEVEL_BY_NAME.get(dep.to_layer)
            if from_level is None or to_level is None or dep.from_layer == dep.to_layer:
                continue
            total += dep.dependency_count
            if from_level == _OUTER_LEVEL and to_level < _OUTER_LEVEL:
                inward += dep.dependency_count

        if total == 0:
            return False
        return inward / total >= self.thresholds.onion_inward_ratio
