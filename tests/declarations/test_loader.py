"""Tests for loading declarations from parser records and JSON files."""

import json

import pytest

from arch_insight.declarations import (
    DeclarationKind,
    DiagnosticKind,
    FieldDecl,
    MethodDecl,
    load_declarations,
    load_declarations_file,
)
from arch_insight.exceptions import InputFileError


class TestLoadDeclarations:
    """Test conversion of JSON-like records."""

    def test_full_record(self):
        records = [
            {
                "qualified_name": "com.shop.domain.Order",
                "language": "kotlin",
                "kind": "class",
                "supertypes": ["AggregateRoot"],
                "fields": [
                    {"name": "id", "type": "OrderId"},
                    {"name": "status", "type": "OrderStatus", "mutable": True},
                ],
                "methods": [
                    {"name": "cancel", "param_types": ["Reason"], "return_type": "Unit"},
                ],
                "markers": ["Entity"],
                "origin_file": "src/main/kotlin/com/shop/domain/Order.kt",
                "imports": ["com.shop.shared.*"],
                "constructor_params": ["OrderId"],
            }
        ]
        declarations, diagnostics = load_declarations(records)

        assert diagnostics == []
        assert len(declarations) == 1
        order = declarations[0]
        assert order.qualified_name == "com.shop.domain.Order"
        assert order.language == "kotlin"
        assert order.kind == DeclarationKind.CLASS
        assert order.supertypes == ("AggregateRoot",)
        assert order.fields == (
            FieldDecl("id", "OrderId"),
            FieldDecl("status", "OrderStatus", mutable=True),
        )
        assert order.methods == (MethodDecl("cancel", ("Reason",), "Unit"),)
        assert order.markers == ("Entity",)
        assert order.imports == ("com.shop.shared.*",)
        assert order.constructor_params == ("OrderId",)

    def test_package_and_name(self):
        declarations, _ = load_declarations([{"package": "com.shop", "name": "Order"}])
        assert declarations[0].qualified_name == "com.shop.Order"
        assert declarations[0].package_name == "com.shop"
        assert declarations[0].simple_name == "Order"

    def test_default_package(self):
        declarations, _ = load_declarations([{"name": "Order"}])
        assert declarations[0].qualified_name == "Order"
        assert declarations[0].package_name == ""

    def test_markers_merged_and_stripped(self):
        declarations, _ = load_declarations(
            [
                {
                    "qualified_name": "a.OrderService",
                    "annotations": ["@Service", "@Transactional"],
                    "modifiers": ["abstract"],
                    "markers": ["Service"],
                }
            ]
        )
        decl = declarations[0]
        assert decl.markers == ("Service", "Transactional", "abstract")
        assert decl.is_abstract

    def test_interface_kind(self):
        declarations, _ = load_declarations([{"qualified_name": "a.Port", "kind": "INTERFACE"}])
        assert declarations[0].kind == DeclarationKind.INTERFACE
        assert declarations[0].is_interface

    def test_unknown_kind_falls_back_to_class(self):
        declarations, diagnostics = load_declarations(
            [{"qualified_name": "a.Thing", "kind": "trait"}]
        )
        assert declarations[0].kind == DeclarationKind.CLASS
        assert diagnostics[0].kind == DiagnosticKind.EXTRACTION_SKIP

    def test_missing_members_are_empty_without_diagnostics(self):
        declarations, diagnostics = load_declarations(
            [{"qualified_name": "a.Order", "fields": None}]
        )
        assert declarations[0].fields == ()
        assert declarations[0].methods == ()
        assert diagnostics == []

    def test_malformed_member_list_is_skipped(self):
        declarations, diagnostics = load_declarations(
            [
                {
                    "qualified_name": "a.Order",
                    "fields": "id: Long",
                    "methods": [{"name": "complete"}],
                }
            ]
        )
        order = declarations[0]
        assert order.fields == ()
        assert order.methods == (MethodDecl("complete"),)
        assert len(diagnostics) == 1
        assert diagnostics[0].kind == DiagnosticKind.EXTRACTION_SKIP
        assert diagnostics[0].subject == "a.Order"
        assert diagnostics[0].message.startswith("fields:")

    def test_nameless_and_non_object_records_are_skipped(self):
        declarations, diagnostics = load_declarations(
            [{"kind": "class"}, ["a.Order"], {"qualified_name": "a.Order"}]
        )
        assert [d.qualified_name for d in declarations] == ["a.Order"]
        assert [d.subject for d in diagnostics] == ["record #0", "record #1"]


class TestLoadDeclarationsFile:
    """Test reading parser output files."""

    def test_list_file(self, tmp_path):
        path = tmp_path / "declarations.json"
        path.write_text(json.dumps([{"qualified_name": "a.Order"}]))
        declarations, diagnostics = load_declarations_file(path)
        assert [d.qualified_name for d in declarations] == ["a.Order"]
        assert diagnostics == []

    def test_wrapped_file(self, tmp_path):
        path = tmp_path / "declarations.json"
        path.write_text(json.dumps({"declarations": [{"qualified_name": "a.Order"}]}))
        declarations, _ = load_declarations_file(path)
        assert len(declarations) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFileError):
            load_declarations_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "declarations.json"
        path.write_text("{not json")
        with pytest.raises(InputFileError) as exc_info:
            load_declarations_file(path)
        assert "invalid JSON" in exc_info.value.reason

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "declarations.json"
        path.write_text(json.dumps({"classes": []}))
        with pytest.raises(InputFileError):
            load_declarations_file(path)
