"""Load declarations from parser output.

Upstream parsers emit one JSON object per type declaration::

    {
        "qualified_name": "com.shop.domain.Order",
        "language": "kotlin",
        "kind": "class",
        "supertypes": ["AggregateRoot"],
        "fields": [{"name": "id", "type": "OrderId", "mutable": false}],
        "methods": [{"name": "cancel", "param_types": [], "return_type": "Unit"}],
        "markers": ["Entity"],
        "origin_file": "src/main/kotlin/com/shop/domain/Order.kt",
        "imports": ["com.shop.shared.*"],
        "constructor_params": ["OrderId"]
    }

``package`` + ``name`` may stand in for ``qualified_name``; ``annotations``
and ``modifiers`` are merged into ``markers``. A member list that is present
but unreadable becomes empty and is reported as EXTRACTION_SKIP.
"""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from ..exceptions import DeclarationExtractionError, InputFileError
from ..logging_config import get_logger
from .models import (
    DeclarationKind,
    DeclarationRef,
    Diagnostic,
    DiagnosticKind,
    DiagnosticLog,
    FieldDecl,
    MethodDecl,
)

logger = get_logger(__name__)


def load_declarations(
    records: Iterable[Mapping[str, Any]],
) -> tuple[list[DeclarationRef], list[Diagnostic]]:
    """Convert parser records into DeclarationRefs.

    Args:
        records: JSON-like mappings, one per declaration

    Returns:
        Tuple of (declarations in input order, diagnostics)
    """
    diagnostics = DiagnosticLog()
    declarations: list[DeclarationRef] = []

    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            diagnostics.add(
                DiagnosticKind.EXTRACTION_SKIP,
                f"record #{position}",
                f"expected an object, got {type(record).__name__}",
            )
            continue

        name = _qualified_name(record)
        if not name:
            logger.warning(f"Skipping record #{position}: no usable name")
            diagnostics.add(
                DiagnosticKind.EXTRACTION_SKIP,
                f"record #{position}",
                "record has no qualified_name (or package and name)",
            )
            continue

        declarations.append(_build_declaration(name, record, diagnostics))

    logger.debug(f"Loaded {len(declarations)} declarations")
    return declarations, diagnostics.entries


def load_declarations_file(path: Path) -> tuple[list[DeclarationRef], list[Diagnostic]]:
    """Read declarations from a JSON file.

    The file holds either a list of records or ``{"declarations": [...]}``.

    Raises:
        InputFileError: If the file cannot be read or has the wrong shape
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise InputFileError(path, str(e))
    except json.JSONDecodeError as e:
        raise InputFileError(path, f"invalid JSON: {e}")

    if isinstance(data, Mapping):
        data = data.get("declarations")
    if not isinstance(data, list):
        raise InputFileError(path, "expected a list of declarations or a 'declarations' key")

    return load_declarations(data)


def _qualified_name(record: Mapping[str, Any]) -> str:
    name = record.get("qualified_name")
    if isinstance(name, str) and name.strip():
        return name.strip()

    simple = record.get("name")
    if not isinstance(simple, str) or not simple.strip():
        return ""
    package = record.get("package") or ""
    if not isinstance(package, str):
        return ""
    return f"{package}.{simple.strip()}" if package else simple.strip()


def _build_declaration(
    name: str, record: Mapping[str, Any], diagnostics: DiagnosticLog
) -> DeclarationRef:
    readers = {
        "supertypes": _read_strings,
        "fields": _read_fields,
        "methods": _read_methods,
        "imports": _read_strings,
        "constructor_params": _read_strings,
    }
    parts: dict[str, tuple] = {}
    for part, reader in readers.items():
        try:
            parts[part] = reader(name, part, record.get(part))
        except DeclarationExtractionError as e:
            logger.warning(str(e))
            diagnostics.add(DiagnosticKind.EXTRACTION_SKIP, name, f"{e.part}: {e.reason}")
            parts[part] = ()

    markers: list[str] = []
    for key in ("markers", "annotations", "modifiers"):
        try:
            for marker in _read_strings(name, key, record.get(key)):
                marker = marker.lstrip("@")
                if marker not in markers:
                    markers.append(marker)
        except DeclarationExtractionError as e:
            logger.warning(str(e))
            diagnostics.add(DiagnosticKind.EXTRACTION_SKIP, name, f"{e.part}: {e.reason}")

    kind_text = str(record.get("kind") or "class").lower()
    try:
        kind = DeclarationKind(kind_text)
    except ValueError:
        diagnostics.add(
            DiagnosticKind.EXTRACTION_SKIP, name, f"unknown kind '{kind_text}', using class"
        )
        kind = DeclarationKind.CLASS

    return DeclarationRef(
        qualified_name=name,
        language=str(record.get("language") or "java"),
        kind=kind,
        supertypes=parts["supertypes"],
        fields=parts["fields"],
        methods=parts["methods"],
        markers=tuple(markers),
        origin_file=str(record.get("origin_file") or record.get("file") or ""),
        imports=parts["imports"],
        constructor_params=parts["constructor_params"],
    )


def _read_strings(name: str, part: str, value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DeclarationExtractionError(name, part, "expected a list of strings")
    return tuple(value)


def _read_fields(name: str, part: str, value: Any) -> tuple[FieldDecl, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise DeclarationExtractionError(name, part, "expected a list of field objects")

    result = []
    for item in value:
        if not isinstance(item, Mapping) or not isinstance(item.get("name"), str):
            raise DeclarationExtractionError(name, part, "field entry without a name")
        markers = item.get("markers") or item.get("annotations") or []
        result.append(
            FieldDecl(
                name=item["name"],
                type_text=str(item.get("type") or item.get("type_text") or ""),
                mutable=bool(item.get("mutable", False)),
                markers=tuple(str(m).lstrip("@") for m in markers),
            )
        )
    return tuple(result)


def _read_methods(name: str, part: str, value: Any) -> tuple[MethodDecl, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise DeclarationExtractionError(name, part, "expected a list of method objects")

    result = []
    for item in value:
        if not isinstance(item, Mapping) or not isinstance(item.get("name"), str):
            raise DeclarationExtractionError(name, part, "method entry without a name")
        params = item.get("param_types") or item.get("params") or []
        if not isinstance(params, list):
            raise DeclarationExtractionError(name, part, f"bad parameters on {item['name']}")
        return_type = item.get("return_type")
        result.append(
            MethodDecl(
                name=item["name"],
                param_types=tuple(str(p) for p in params),
                return_type=str(return_type) if return_type else None,
                is_abstract=bool(item.get("is_abstract", False)),
            )
        )
    return tuple(result)
