"""DependencyGraphBuilder: declarations to nodes and typed edges.

Edge rules per declaration:
1. each resolvable supertype       -> INHERITANCE
2. each resolvable field type      -> COMPOSITION
3. each resolvable parameter or return type -> USAGE

References of the same type between the same two nodes are merged into one
edge whose strength accumulates.
"""

from collections import Counter
from collections.abc import Callable, Iterable
from typing import Optional

from ..declarations.index import DeclarationIndex
from ..declarations.models import DeclarationRef, DiagnosticKind
from ..exceptions import DeclarationExtractionError
from ..logging_config import get_logger
from .models import DependencyEdge, DependencyGraph, DependencyNode, DependencyType, NodeType
from .packages import summarize_packages

logger = get_logger(__name__)

_TYPE_ORDER = {t: i for i, t in enumerate(DependencyType)}


class DependencyGraphBuilder:
    """Builds the dependency graph for one DeclarationIndex."""

    def __init__(self, index: DeclarationIndex) -> None:
        self.index = index

    def build(
        self, package_layer: Optional[Callable[[str], Optional[str]]] = None
    ) -> DependencyGraph:
        """Build nodes, edges and package summaries.

        Cycles are left empty; see :class:`~arch_insight.graph.cycles.CycleDetector`.

        Args:
            package_layer: Optional callback giving the layer of a package name

        Returns:
            DependencyGraph with nodes sorted by id
        """
        nodes = [self._make_node(decl) for decl in self.index]

        counts: Counter[tuple[str, str, DependencyType]] = Counter()
        for decl in self.index:
            try:
                refs = list(self._references(decl))
            except DeclarationExtractionError as e:
                logger.warning(f"{e}; keeping node without outgoing edges")
                self.index.diagnostics.add(
                    DiagnosticKind.EXTRACTION_SKIP,
                    decl.qualified_name,
                    f"{e.part}: {e.reason}",
                )
                continue
            for target, dep_type in refs:
                counts[(decl.qualified_name, target, dep_type)] += 1

        edges = [
            DependencyEdge(
                from_id=source,
                to_id=target,
                dependency_type=dep_type,
                strength=dep_type.weight * count,
            )
            for (source, target, dep_type), count in sorted(
                counts.items(), key=lambda item: (item[0][0], item[0][1], _TYPE_ORDER[item[0][2]])
            )
        ]

        logger.debug(f"Built graph: {len(nodes)} nodes, {len(edges)} edges")

        return DependencyGraph(
            nodes=nodes,
            edges=edges,
            packages=summarize_packages(nodes, edges, package_layer),
        )

    def _make_node(self, decl: DeclarationRef) -> DependencyNode:
        kind = getattr(decl, "kind", None)
        try:
            node_type = NodeType(kind.value)
        except (AttributeError, ValueError):
            node_type = NodeType.CLASS
        return DependencyNode(
            id=decl.qualified_name,
            class_name=decl.simple_name,
            package_name=decl.package_name,
            file_name=str(getattr(decl, "origin_file", "") or ""),
            language=str(getattr(decl, "language", "") or ""),
            node_type=node_type,
        )

    def _references(self, decl: DeclarationRef) -> Iterable[tuple[str, DependencyType]]:
        """Yield (target id, dependency type) for every resolvable reference."""
        own_id = decl.qualified_name

        part = "supertypes"
        try:
            candidates = [
                (s, DependencyType.INHERITANCE) for s in _members(decl.supertypes, own_id, part)
            ]
            part = "fields"
            candidates.extend(
                (f.type_text, DependencyType.COMPOSITION)
                for f in _members(decl.fields, own_id, part)
            )
            part = "methods"
            for method in _members(decl.methods, own_id, part):
                candidates.extend(
                    (p, DependencyType.USAGE) for p in _members(method.param_types, own_id, part)
                )
                if method.return_type:
                    candidates.append((method.return_type, DependencyType.USAGE))
            part = "imports"
            _members(decl.imports, own_id, part)
        except (AttributeError, TypeError) as e:
            raise DeclarationExtractionError(own_id, part, str(e))

        for type_text, dep_type in candidates:
            try:
                target = self.index.resolve(type_text, decl)
            except (AttributeError, TypeError) as e:
                raise DeclarationExtractionError(own_id, dep_type.value, str(e))
            if target is not None and target != own_id:
                yield target, dep_type


def _members(value, own_id: str, part: str):
    """Return ``value`` if it is a member list; a bare string is not one."""
    if not isinstance(value, (tuple, list)):
        raise DeclarationExtractionError(
            own_id, part, f"expected a list, got {type(value).__name__}"
        )
    return value
