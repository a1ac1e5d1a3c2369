"""Tests for DddRoleDetector: thresholds, role facts and aggregates."""

import pytest

from arch_insight.config import ThresholdConfig
from arch_insight.ddd import DddEntity, DddRole, DddRoleDetector, RoleScores
from arch_insight.declarations import (
    DeclarationIndex,
    DeclarationKind,
    DeclarationRef,
    DiagnosticKind,
    FieldDecl,
    MethodDecl,
)


@pytest.fixture
def shop_declarations(make_decl, order_declarations):
    order, repository = order_declarations
    order = DeclarationRef(
        order.qualified_name,
        fields=order.fields + (FieldDecl("lines", "MutableList<OrderLine>"),),
        methods=order.methods,
        origin_file=order.origin_file,
    )
    line = make_decl(
        "com.shop.domain.OrderLine",
        fields=[FieldDecl("id", "Long"), FieldDecl("quantity", "Int", mutable=True)],
        methods=[MethodDecl("increase", ("Int",))],
    )
    money = make_decl(
        "com.shop.domain.Money",
        fields=[FieldDecl("amount", "BigDecimal"), FieldDecl("currency", "String")],
        markers=["data"],
    )
    placed = make_decl(
        "com.shop.domain.OrderPlacedEvent",
        fields=[FieldDecl("orderId", "Long"), FieldDecl("occurredAt", "Instant")],
    )
    service = make_decl(
        "com.shop.service.CheckoutService",
        fields=[FieldDecl("orders", "OrderRepository")],
        methods=[MethodDecl("process", ("Order",))],
        constructor_params=["OrderRepository"],
    )
    return [order, repository, line, money, placed, service]


def _detector(declarations, **thresholds):
    return DddRoleDetector(DeclarationIndex.build(declarations), ThresholdConfig(**thresholds))


class TestDetect:
    """Test role lists produced above the inclusion threshold."""

    def test_roles(self, shop_declarations):
        analysis = _detector(shop_declarations).detect()

        assert [e.qualified_name for e in analysis.entities] == [
            "com.shop.domain.Order",
            "com.shop.domain.OrderLine",
        ]
        assert [v.qualified_name for v in analysis.value_objects] == ["com.shop.domain.Money"]
        assert [s.qualified_name for s in analysis.services] == [
            "com.shop.service.CheckoutService"
        ]
        assert [r.qualified_name for r in analysis.repositories] == [
            "com.shop.repository.OrderRepository"
        ]
        assert [e.qualified_name for e in analysis.domain_events] == [
            "com.shop.domain.OrderPlacedEvent"
        ]

    def test_role_facts(self, shop_declarations):
        analysis = _detector(shop_declarations).detect()

        order = analysis.entities[0]
        assert order.class_name == "Order"
        assert order.file_name == "src/main/java/com/shop/domain/Order.java"
        assert order.has_unique_id
        assert order.is_mutable
        assert order.id_fields == ["id"]

        money = analysis.value_objects[0]
        assert money.is_immutable
        assert money.has_value_equality
        assert money.properties == ["amount", "currency"]

        service = analysis.services[0]
        assert service.is_stateless
        assert service.has_domain_logic
        assert service.methods == ["process"]

        repository = analysis.repositories[0]
        assert repository.is_interface
        assert repository.has_data_access
        assert repository.crud_methods == ["findById", "save"]

        event = analysis.domain_events[0]
        assert event.has_event_naming
        assert event.has_timestamp
        assert event.is_immutable

    def test_confidences_within_bounds(self, shop_declarations):
        analysis = _detector(shop_declarations).detect()
        found = (
            analysis.entities
            + analysis.value_objects
            + analysis.services
            + analysis.repositories
            + analysis.domain_events
            + analysis.aggregates
        )
        assert found
        for item in found:
            assert 0.0 <= item.confidence <= 1.0

    def test_threshold_is_strict(self, make_decl):
        # equals/hashCode (0.2) + no mutators (0.1) is exactly 0.3
        pair = make_decl(
            "a.Pair",
            fields=[FieldDecl("x", "Int", mutable=True)],
            methods=[MethodDecl("equals", ("Any?",)), MethodDecl("hashCode"), MethodDecl("rotate")],
        )
        detector = _detector([pair])
        assert detector.score_all()[0].scores["value_object"] == 0.3
        assert detector.detect().value_objects == []

    def test_higher_threshold_reports_less(self, shop_declarations):
        analysis = _detector(shop_declarations, role_threshold=0.95).detect()
        assert [e.qualified_name for e in analysis.entities] == [
            "com.shop.domain.Order",
            "com.shop.domain.OrderLine",
        ]
        assert analysis.domain_events == []

    def test_empty_declaration_reports_nothing(self, make_decl):
        detector = _detector([make_decl("com.shop.Empty")])
        analysis = detector.detect()
        assert analysis.entities == []
        assert analysis.value_objects == []
        assert analysis.services == []
        assert analysis.repositories == []
        assert analysis.domain_events == []
        scores = detector.score_all()[0].scores
        assert max(scores.values()) <= 0.3

    def test_empty_index(self):
        detector = _detector([])
        assert detector.score_all() == []
        analysis = detector.detect()
        assert analysis.entities == []
        assert analysis.aggregates == []


class TestAggregates:
    """Test aggregate discovery from entity references."""

    def test_root_with_collection_of_entities(self, shop_declarations):
        analysis = _detector(shop_declarations).detect()

        assert len(analysis.aggregates) == 1
        aggregate = analysis.aggregates[0]
        assert aggregate.root_entity == "com.shop.domain.Order"
        assert aggregate.related_entities == ["com.shop.domain.OrderLine"]
        assert aggregate.confidence == pytest.approx(0.8)

    def test_root_threshold(self, shop_declarations):
        analysis = _detector(shop_declarations, aggregate_root_threshold=1.0).detect()
        assert analysis.aggregates == []

    def test_references_to_non_entities_do_not_count(self, make_decl):
        order = make_decl(
            "com.shop.domain.Order",
            fields=[FieldDecl("id", "Long"), FieldDecl("total", "Money", mutable=True)],
            methods=[MethodDecl("complete")],
        )
        money = make_decl("com.shop.domain.Money", fields=[FieldDecl("amount", "Long")])
        analysis = _detector([order, money]).detect()
        assert [e.qualified_name for e in analysis.entities] == ["com.shop.domain.Order"]
        assert analysis.aggregates == []

    def test_unresolvable_field_type_is_skipped(self, make_decl):
        order = make_decl(
            "com.shop.domain.Order", imports=[None], fields=[FieldDecl("line", "LineItem")]
        )
        line = make_decl("com.shop.domain.LineItem", fields=[FieldDecl("id", "Long")])
        detector = _detector([order, line])
        entities = [
            DddEntity("Order", "com.shop.domain.Order", "", confidence=1.0),
            DddEntity("LineItem", "com.shop.domain.LineItem", "", confidence=1.0),
        ]

        assert detector.find_aggregates(entities) == []
        diagnostics = detector.index.diagnostics.entries
        assert [(d.kind, d.subject) for d in diagnostics] == [
            (DiagnosticKind.EXTRACTION_SKIP, "com.shop.domain.Order")
        ]


class TestScoreAll:
    """Test raw scores for every declaration."""

    def test_every_declaration_every_role(self, shop_declarations):
        scores = _detector(shop_declarations).score_all()
        assert [s.qualified_name for s in scores] == sorted(d.qualified_name for d in shop_declarations)
        for entry in scores:
            assert set(entry.scores) == {role.value for role in DddRole}

    def test_best_role(self, shop_declarations):
        by_name = {s.qualified_name: s for s in _detector(shop_declarations).score_all()}
        assert by_name["com.shop.domain.Order"].best() == ("entity", 1.0)
        assert by_name["com.shop.repository.OrderRepository"].best() == ("repository", 1.0)

    def test_best_of_nothing(self):
        assert RoleScores("a.Empty").best() == ("", 0.0)

    def test_malformed_declaration_scores_zero(self, make_decl):
        broken = DeclarationRef("a.Broken", fields=None)
        detector = _detector([broken, make_decl("a.OrderService", methods=[MethodDecl("process")])])
        scores = {s.qualified_name: s.scores for s in detector.score_all()}
        assert set(scores["a.Broken"].values()) == {0.0}
        assert scores["a.OrderService"]["service"] > 0.3
        assert [s.qualified_name for s in detector.detect().services] == ["a.OrderService"]

    def test_interface_repository_kind(self, make_decl):
        decl = make_decl(
            "a.CustomerDao",
            kind=DeclarationKind.INTERFACE,
            methods=[MethodDecl("findAll", (), "List<Customer>", is_abstract=True)],
        )
        scores = _detector([decl]).score_all()[0].scores
        assert scores["repository"] > 0.3
        assert scores["entity"] == 0.0
