"""Shared test fixtures for arch-insight tests."""

import pytest

from arch_insight.declarations import (
    DeclarationIndex,
    DeclarationKind,
    DeclarationRef,
    FieldDecl,
    MethodDecl,
)
from arch_insight.graph import CycleDetector, DependencyGraphBuilder


def _decl(qualified_name, **kwargs):
    """DeclarationRef with list arguments converted to tuples."""
    for key in ("supertypes", "fields", "methods", "markers", "imports", "constructor_params"):
        if key in kwargs:
            kwargs[key] = tuple(kwargs[key])
    return DeclarationRef(qualified_name, **kwargs)


@pytest.fixture
def make_decl():
    return _decl


@pytest.fixture
def build_graph():
    """Index, graph and cycles for a list of declarations."""

    def _build(declarations, package_layer=None):
        index = DeclarationIndex.build(declarations)
        graph = DependencyGraphBuilder(index).build(package_layer=package_layer)
        graph.cycles = CycleDetector().detect(graph)
        return graph

    return _build


@pytest.fixture
def order_declarations():
    """An entity and the repository interface that stores it."""
    order = _decl(
        "com.shop.domain.Order",
        fields=[
            FieldDecl("id", "Long"),
            FieldDecl("status", "OrderStatus", mutable=True),
        ],
        methods=[
            MethodDecl("equals", ("Object",), "Boolean"),
            MethodDecl("hashCode", (), "Int"),
            MethodDecl("complete"),
        ],
        origin_file="src/main/java/com/shop/domain/Order.java",
    )
    repository = _decl(
        "com.shop.repository.OrderRepository",
        kind=DeclarationKind.INTERFACE,
        methods=[
            MethodDecl("findById", ("Long",), "Order", is_abstract=True),
            MethodDecl("save", ("Order",), "Unit", is_abstract=True),
        ],
        imports=["com.shop.domain.Order"],
        origin_file="src/main/java/com/shop/repository/OrderRepository.java",
    )
    return [order, repository]


@pytest.fixture
def service_cycle_declarations():
    """Two services that hold each other."""
    return [
        _decl("com.shop.service.ServiceA", fields=[FieldDecl("b", "ServiceB")]),
        _decl("com.shop.service.ServiceB", fields=[FieldDecl("a", "ServiceA")]),
    ]
