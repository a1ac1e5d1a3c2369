"""DeclarationIndex: the immutable snapshot every analysis stage reads.

The index is built once per run. Declarations are ordered by qualified name
so that graph construction, cycle detection and scoring do not depend on the
order the upstream parser happened to emit them in.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from typing import Optional

from ..logging_config import get_logger
from .models import DeclarationRef, DiagnosticKind, DiagnosticLog
from .types import clean_type_name

logger = get_logger(__name__)


class DeclarationIndex:
    """Lookup tables over a fixed set of declarations.

    Use :meth:`build` rather than the constructor; it drops duplicates and
    records diagnostics for them.
    """

    def __init__(
        self,
        declarations: list[DeclarationRef],
        diagnostics: Optional[DiagnosticLog] = None,
    ) -> None:
        self._declarations: tuple[DeclarationRef, ...] = tuple(
            sorted(declarations, key=lambda d: d.qualified_name)
        )
        self._by_id: dict[str, DeclarationRef] = {d.qualified_name: d for d in self._declarations}

        by_simple: dict[str, list[str]] = defaultdict(list)
        for decl in self._declarations:
            by_simple[decl.simple_name].append(decl.qualified_name)
        self._by_simple: dict[str, tuple[str, ...]] = {k: tuple(v) for k, v in by_simple.items()}

        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    @classmethod
    def build(cls, declarations: Iterable[DeclarationRef]) -> DeclarationIndex:
        """Build an index, keeping the first declaration seen for each id.

        Args:
            declarations: Declarations in upstream order

        Returns:
            A new DeclarationIndex
        """
        diagnostics = DiagnosticLog()
        seen: dict[str, DeclarationRef] = {}

        for decl in declarations:
            if not isinstance(decl, DeclarationRef):
                logger.warning(f"Skipping object that is not a declaration: {decl!r}")
                diagnostics.add(
                    DiagnosticKind.EXTRACTION_SKIP,
                    repr(decl),
                    f"expected DeclarationRef, got {type(decl).__name__}",
                )
                continue
            name = decl.qualified_name
            if not isinstance(name, str) or not name.strip():
                logger.warning(f"Skipping declaration without a qualified name: {decl!r}")
                diagnostics.add(
                    DiagnosticKind.EXTRACTION_SKIP,
                    repr(decl),
                    "declaration has no qualified name",
                )
                continue
            if name in seen:
                logger.debug(f"Duplicate declaration dropped: {name}")
                diagnostics.add(
                    DiagnosticKind.DUPLICATE_DECLARATION,
                    name,
                    f"duplicate declaration of {name} dropped",
                )
                continue
            seen[name] = decl

        return cls(list(seen.values()), diagnostics)

    def __len__(self) -> int:
        return len(self._declarations)

    def __iter__(self) -> Iterator[DeclarationRef]:
        return iter(self._declarations)

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._by_id

    @property
    def declarations(self) -> tuple[DeclarationRef, ...]:
        return self._declarations

    @property
    def ids(self) -> list[str]:
        return [d.qualified_name for d in self._declarations]

    def get(self, qualified_name: str) -> Optional[DeclarationRef]:
        return self._by_id.get(qualified_name)

    def with_simple_name(self, simple_name: str) -> tuple[str, ...]:
        """Ids of every declaration whose simple name is ``simple_name``."""
        return self._by_simple.get(simple_name, ())

    def resolve(self, type_text: str, context: DeclarationRef) -> Optional[str]:
        """Resolve a type reference written inside ``context`` to an id.

        Resolution order:
            1. exact qualified-name match
            2. explicit import, then wildcard import, of the declaring file
            3. same package as ``context``
            4. unique simple name across the index; when several
               declarations share the name the smallest id wins and an
               AMBIGUOUS_REFERENCE diagnostic is recorded

        Args:
            type_text: Raw type text as written in source
            context: Declaration the reference appears in

        Returns:
            Qualified name of the target declaration, or None if unresolved
        """
        name = clean_type_name(type_text)
        if not name:
            return None

        if name in self._by_id:
            return name

        # Qualified names that are not indexed belong to external libraries
        if "." in name:
            head = name.split(".", 1)[0]
            if not head[:1].isupper():
                return None
            # Outer.Inner style reference: resolve the outer type
            name = head

        imports = context.imports
        for imp in imports:
            if not imp.endswith(".*") and imp.rpartition(".")[2] == name and imp in self._by_id:
                return imp

        for imp in imports:
            if imp.endswith(".*"):
                candidate = f"{imp[:-2]}.{name}"
                if candidate in self._by_id:
                    return candidate

        package = context.package_name
        candidate = f"{package}.{name}" if package else name
        if candidate in self._by_id:
            return candidate

        matches = self._by_simple.get(name, ())
        if not matches:
            return None
        if len(matches) > 1:
            chosen = matches[0]
            logger.debug(
                f"Ambiguous reference '{name}' in {context.qualified_name}: "
                f"{len(matches)} candidates, using {chosen}"
            )
            self.diagnostics.add(
                DiagnosticKind.AMBIGUOUS_REFERENCE,
                f"{context.qualified_name} -> {name}",
                f"'{name}' matches {', '.join(matches)}; using {chosen}",
            )
            return chosen
        return matches[0]
