"""Language-neutral declaration models.

A DeclarationRef is the unit every analysis stage works on. Upstream parsers
(Java, Kotlin, ...) reduce each type declaration to one of these, so nothing
downstream needs language-specific branches.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class DeclarationKind(Enum):
    """Kind of a type declaration."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    OBJECT = "object"


class DiagnosticKind(Enum):
    """Non-fatal problems recorded while indexing and building the graph."""

    EXTRACTION_SKIP = "extraction_skip"  # members of a declaration could not be read
    AMBIGUOUS_REFERENCE = "ambiguous_reference"  # simple name matched several ids
    DUPLICATE_DECLARATION = "duplicate_declaration"  # id seen more than once


@dataclass(frozen=True)
class FieldDecl:
    """A field or property of a declaration."""

    name: str
    type_text: str = ""
    mutable: bool = False
    markers: tuple[str, ...] = ()


@dataclass(frozen=True)
class MethodDecl:
    """A method or function member of a declaration."""

    name: str
    param_types: tuple[str, ...] = ()
    return_type: Optional[str] = None
    is_abstract: bool = False  # no body


@dataclass(frozen=True)
class DeclarationRef:
    """One discovered type declaration.

    ``markers`` holds annotation names (``Entity``, ``Service``) as well as
    modifier keywords (``abstract``, ``data``, ``record``, ``value``).
    Wildcard entries in ``imports`` end in ``.*``.
    """

    qualified_name: str
    language: str = "java"
    kind: DeclarationKind = DeclarationKind.CLASS
    supertypes: tuple[str, ...] = ()
    fields: tuple[FieldDecl, ...] = ()
    methods: tuple[MethodDecl, ...] = ()
    markers: tuple[str, ...] = ()
    origin_file: str = ""
    imports: tuple[str, ...] = ()
    constructor_params: tuple[str, ...] = ()

    @property
    def package_name(self) -> str:
        head, _, _ = self.qualified_name.rpartition(".")
        return head

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rpartition(".")[2]

    @property
    def is_interface(self) -> bool:
        return self.kind == DeclarationKind.INTERFACE

    @property
    def is_abstract(self) -> bool:
        return self.is_interface or "abstract" in self.markers

    def has_marker(self, *names: str) -> bool:
        """True if any of ``names`` is among this declaration's markers."""
        return any(name in self.markers for name in names)


@dataclass(frozen=True)
class Diagnostic:
    """A recorded non-fatal problem."""

    kind: DiagnosticKind
    subject: str
    message: str


@dataclass
class DiagnosticLog:
    """Ordered, de-duplicated collection of diagnostics for one run."""

    entries: list[Diagnostic] = field(default_factory=list)

    def add(self, kind: DiagnosticKind, subject: str, message: str) -> None:
        diagnostic = Diagnostic(kind=kind, subject=subject, message=message)
        if diagnostic not in self.entries:
            self.entries.append(diagnostic)

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            if diagnostic not in self.entries:
                self.entries.append(diagnostic)
