"""Layer inference from naming conventions.

Priority order for a node:
1. Package keyword: the first layer (outermost first) with a keyword
   matching any dot-separated package segment
2. Class-name suffix
3. Unclassified (None)
"""

from collections import defaultdict
from typing import Optional

from ..graph.models import DependencyGraph
from ..logging_config import get_logger
from .models import ArchitectureLayer, LayerType

logger = get_logger(__name__)

PACKAGE_KEYWORDS: dict[LayerType, tuple[str, ...]] = {
    LayerType.PRESENTATION: ("presentation", "controller", "api", "web", "ui"),
    LayerType.APPLICATION: ("application", "service", "usecase", "interactor"),
    LayerType.DOMAIN: ("domain", "model", "entity"),
    LayerType.DATA: ("repository", "repositories", "dao", "data", "persistence"),
    LayerType.INFRASTRUCTURE: ("infrastructure", "config", "adapter", "framework"),
}

CLASS_SUFFIXES: list[tuple[tuple[str, ...], LayerType]] = [
    (("Controller", "Endpoint", "Api"), LayerType.PRESENTATION),
    (("Service", "Manager"), LayerType.APPLICATION),
    (("Repository", "DAO", "Dao"), LayerType.DATA),
    (("Entity", "Model"), LayerType.DOMAIN),
    (("Config", "Configuration"), LayerType.INFRASTRUCTURE),
]


def segment_matches(segment: str, keyword: str) -> bool:
    """True if a lower-cased package segment names ``keyword``.

    A segment matches when it equals the keyword or its plural, or, for
    keywords of five letters or more, starts with it (``configuration``
    matches ``config``).
    """
    if segment == keyword:
        return True
    if segment == keyword + "s" or (keyword.endswith("y") and segment == keyword[:-1] + "ies"):
        return True
    return len(keyword) >= 5 and segment.startswith(keyword)


class LayerClassifier:
    """Assigns a layer to each graph node."""

    def classify_package(self, package_name: str) -> Optional[str]:
        """Layer named by a package's segments, or None."""
        segments = [s.lower() for s in package_name.split(".") if s]
        for layer_type, keywords in PACKAGE_KEYWORDS.items():
            if any(segment_matches(seg, kw) for seg in segments for kw in keywords):
                return layer_type.value
        return None

    def classify_class_name(self, class_name: str) -> Optional[str]:
        for suffixes, layer_type in CLASS_SUFFIXES:
            if class_name.endswith(suffixes):
                return layer_type.value
        return None

    def classify(self, package_name: str, class_name: str) -> Optional[str]:
        """Infer the layer of one class.

        Args:
            package_name: Package of the class ("" for the default package)
            class_name: Simple class name

        Returns:
            Layer name (a LayerType value) or None if unclassified
        """
        return self.classify_package(package_name) or self.classify_class_name(class_name)

    def assign(self, graph: DependencyGraph) -> list[ArchitectureLayer]:
        """Set ``node.layer`` on every node and group nodes into layers.

        Returns:
            Non-empty layers ordered by level, then name
        """
        members: dict[LayerType, list[str]] = defaultdict(list)
        packages: dict[LayerType, set[str]] = defaultdict(set)

        for node in graph.nodes:
            node.layer = self.classify(node.package_name, node.class_name)
            if node.layer is None:
                continue
            layer_type = LayerType(node.layer)
            members[layer_type].append(node.id)
            if node.package_name:
                packages[layer_type].add(node.package_name)

        layers = [
            ArchitectureLayer(
                name=layer_type.value,
                layer_type=layer_type,
                level=layer_type.level,
                classes=sorted(members[layer_type]),
                packages=sorted(packages[layer_type]),
            )
            for layer_type in LayerType
            if members.get(layer_type)
        ]
        layers.sort(key=lambda layer: (layer.level, layer.name))

        unclassified = sum(1 for node in graph.nodes if node.layer is None)
        logger.debug(f"Classified {len(graph.nodes) - unclassified} nodes into {len(layers)} layers")
        return layers
