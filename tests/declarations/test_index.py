"""Tests for DeclarationIndex building and type resolution."""

from arch_insight.declarations import (
    DeclarationIndex,
    DeclarationRef,
    DiagnosticKind,
    clean_type_name,
    type_arguments,
)


class TestCleanTypeName:
    """Test reduction of raw type text to a bare name."""

    def test_plain_name(self):
        assert clean_type_name("Order") == "Order"

    def test_strips_generics(self):
        assert clean_type_name("List<Order>") == "List"
        assert clean_type_name("Map<String, List<Order>>") == "Map"

    def test_strips_nullability_and_arrays(self):
        assert clean_type_name("Order?") == "Order"
        assert clean_type_name("Order[]") == "Order"
        assert clean_type_name("Order...") == "Order"

    def test_strips_annotations(self):
        assert clean_type_name("@Nullable Order") == "Order"
        assert clean_type_name('@Size(max = 3) String') == "String"

    def test_keeps_qualified_name(self):
        assert clean_type_name("java.util.List<Order>") == "java.util.List"

    def test_empty_and_garbage(self):
        assert clean_type_name("") == ""
        assert clean_type_name("(Int) -> Unit") == ""


class TestTypeArguments:
    def test_no_generics(self):
        assert type_arguments("Order") == []

    def test_nested_arguments(self):
        assert type_arguments("Map<String, List<Order>>") == ["String", "List", "Order"]

    def test_wildcards_and_variance(self):
        assert type_arguments("List<? extends Item>") == ["Item"]
        assert type_arguments("List<out Item>") == ["Item"]
        assert type_arguments("Map<*, Item?>") == ["Item"]


class TestIndexBuild:
    """Test index construction, ordering and duplicate handling."""

    def test_sorted_by_qualified_name(self):
        index = DeclarationIndex.build(
            [DeclarationRef("b.Zeta"), DeclarationRef("a.Alpha"), DeclarationRef("a.Beta")]
        )
        assert index.ids == ["a.Alpha", "a.Beta", "b.Zeta"]
        assert len(index) == 3

    def test_first_duplicate_wins(self):
        first = DeclarationRef("a.Order", origin_file="first.java")
        second = DeclarationRef("a.Order", origin_file="second.java")
        index = DeclarationIndex.build([first, second])

        assert len(index) == 1
        assert index.get("a.Order").origin_file == "first.java"
        kinds = [d.kind for d in index.diagnostics.entries]
        assert kinds == [DiagnosticKind.DUPLICATE_DECLARATION]

    def test_skips_non_declarations(self):
        index = DeclarationIndex.build([DeclarationRef("a.Order"), "not a declaration", None])
        assert index.ids == ["a.Order"]
        skips = [
            d for d in index.diagnostics.entries if d.kind == DiagnosticKind.EXTRACTION_SKIP
        ]
        assert len(skips) == 2

    def test_skips_blank_name(self):
        index = DeclarationIndex.build([DeclarationRef("   ")])
        assert len(index) == 0
        assert index.diagnostics.entries[0].kind == DiagnosticKind.EXTRACTION_SKIP

    def test_contains_and_simple_names(self):
        index = DeclarationIndex.build([DeclarationRef("a.Order"), DeclarationRef("b.Order")])
        assert "a.Order" in index
        assert "Order" not in index
        assert index.with_simple_name("Order") == ("a.Order", "b.Order")
        assert index.with_simple_name("Missing") == ()


class TestResolve:
    """Test type-name resolution order."""

    def test_exact_qualified_name(self):
        index = DeclarationIndex.build([DeclarationRef("a.Order"), DeclarationRef("b.Client")])
        context = index.get("b.Client")
        assert index.resolve("a.Order", context) == "a.Order"

    def test_unknown_qualified_name_is_external(self):
        index = DeclarationIndex.build([DeclarationRef("a.List"), DeclarationRef("b.Client")])
        context = index.get("b.Client")
        assert index.resolve("java.util.List", context) is None

    def test_outer_inner_reference_resolves_outer(self):
        index = DeclarationIndex.build([DeclarationRef("a.Order"), DeclarationRef("a.Client")])
        context = index.get("a.Client")
        assert index.resolve("Order.Status", context) == "a.Order"

    def test_explicit_import_beats_same_package(self):
        index = DeclarationIndex.build(
            [
                DeclarationRef("a.Order"),
                DeclarationRef("b.Order"),
                DeclarationRef("b.Client", imports=("a.Order",)),
            ]
        )
        assert index.resolve("Order", index.get("b.Client")) == "a.Order"

    def test_wildcard_import(self):
        index = DeclarationIndex.build(
            [
                DeclarationRef("a.Order"),
                DeclarationRef("b.Order"),
                DeclarationRef("c.Client", imports=("b.*",)),
            ]
        )
        assert index.resolve("Order", index.get("c.Client")) == "b.Order"

    def test_same_package(self):
        index = DeclarationIndex.build(
            [DeclarationRef("a.Order"), DeclarationRef("b.Order"), DeclarationRef("b.Client")]
        )
        assert index.resolve("Order", index.get("b.Client")) == "b.Order"

    def test_unique_simple_name(self):
        index = DeclarationIndex.build([DeclarationRef("a.Order"), DeclarationRef("b.Client")])
        assert index.resolve("List<Order>?", index.get("b.Client")) is None
        assert index.resolve("Order?", index.get("b.Client")) == "a.Order"
        assert index.diagnostics.entries == []

    def test_ambiguous_picks_smallest_id_and_records_it(self):
        index = DeclarationIndex.build(
            [DeclarationRef("b.Order"), DeclarationRef("a.Order"), DeclarationRef("c.Client")]
        )
        assert index.resolve("Order", index.get("c.Client")) == "a.Order"
        diagnostics = index.diagnostics.entries
        assert len(diagnostics) == 1
        assert diagnostics[0].kind == DiagnosticKind.AMBIGUOUS_REFERENCE
        assert diagnostics[0].subject == "c.Client -> Order"

    def test_unresolved(self):
        index = DeclarationIndex.build([DeclarationRef("a.Client")])
        assert index.resolve("String", index.get("a.Client")) is None
        assert index.resolve("", index.get("a.Client")) is None
