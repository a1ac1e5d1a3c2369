"""Declaration models, the DeclarationIndex and the parser-output loader."""

from .index import DeclarationIndex
from .loader import load_declarations, load_declarations_file
from .models import (
    DeclarationKind,
    DeclarationRef,
    Diagnostic,
    DiagnosticKind,
    DiagnosticLog,
    FieldDecl,
    MethodDecl,
)
from .types import clean_type_name, type_arguments

__all__ = [
    "DeclarationIndex",
    "DeclarationKind",
    "DeclarationRef",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "FieldDecl",
    "MethodDecl",
    "clean_type_name",
    "load_declarations",
    "load_declarations_file",
    "type_arguments",
]
