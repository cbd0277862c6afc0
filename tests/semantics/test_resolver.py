"""Tests for the in-unit semantic model."""

from __future__ import annotations

from codedocr.semantics import SymbolId, SymbolKind, UnitSemanticModel
from codedocr.syntax import IdentifierName

from tests._fixtures.nodes import klass, method, prop, ref, unit


def _type(name: str) -> SymbolId:
    return SymbolId(SymbolKind.NAMED_TYPE, name)


def test_declared_symbol_uses_qualified_name() -> None:
    order = klass("Order", namespace="Shop.Sales")
    model = UnitSemanticModel([order])

    assert model.declared_symbol(order) == _type("Shop.Sales.Order")


def test_unknown_declaration_has_no_symbol() -> None:
    model = UnitSemanticModel([klass("A")])

    assert model.declared_symbol(klass("Other")) is None


def test_members_shadow_types_outside_type_positions() -> None:
    owner = klass("Owner", members=[prop("Item", "int"), method("Save")])
    item = klass("Item")
    model = UnitSemanticModel([owner, item])

    assert model.resolved_symbol(ref("Item", "Owner")) == SymbolId(SymbolKind.PROPERTY, "Owner.Item")
    assert model.resolved_symbol(ref("Save", "Owner")) == SymbolId(SymbolKind.METHOD, "Owner.Save")
    assert model.resolved_symbol(ref("Item", "Owner", is_type=True)) == _type("Item")


def test_nested_types_resolve_before_namespace_types() -> None:
    inner = klass("Node", qualified_name="Lib.Tree.Node", namespace="Lib")
    outer = klass("Tree", namespace="Lib", members=[inner])
    sibling = klass("Node", namespace="Lib")
    model = UnitSemanticModel([outer, inner, sibling])

    assert model.resolved_symbol(ref("Node", "Lib.Tree")) == _type("Lib.Tree.Node")
    assert model.resolved_symbol(ref("Node", "Lib.Tree.Node")) == _type("Lib.Tree.Node")


def test_enclosing_namespaces_are_searched_innermost_first() -> None:
    client = klass("Client", namespace="Company.Api")
    inner_options = klass("Options", namespace="Company.Api")
    outer_options = klass("Options", namespace="Company")
    model = UnitSemanticModel([client, inner_options, outer_options])

    assert model.resolved_symbol(ref("Options", "Company.Api.Client")) == _type("Company.Api.Options")


def test_using_directives_import_namespaces() -> None:
    handler = klass("Handler", namespace="App")
    request = klass("Request", namespace="Contracts")
    other = klass("Request", namespace="Legacy")
    model = UnitSemanticModel([handler, request, other], usings=["Contracts"])

    assert model.resolved_symbol(ref("Request", "App.Handler")) == _type("Contracts.Request")


def test_ambiguous_simple_names_stay_unresolved() -> None:
    handler = klass("Handler", namespace="App")
    model = UnitSemanticModel(
        [handler, klass("Request", namespace="One"), klass("Request", namespace="Two")]
    )

    assert model.resolved_symbol(ref("Request", "App.Handler")) is None


def test_unknown_names_are_unresolved() -> None:
    model = UnitSemanticModel([klass("A")])

    assert model.resolved_symbol(IdentifierName("Console", "A")) is None


def test_partial_classes_merge_members() -> None:
    first = klass("Order", members=[prop("Id", "int")])
    second = klass("Order", members=[method("Ship")])
    model = UnitSemanticModel([first, second])

    assert model.declared_symbol(second) == _type("Order")
    assert model.resolved_symbol(ref("Ship", "Order")) == SymbolId(SymbolKind.METHOD, "Order.Ship")
    assert model.resolved_symbol(ref("Id", "Order")) == SymbolId(SymbolKind.PROPERTY, "Order.Id")


def test_from_unit_reads_usings() -> None:
    compilation_unit = unit(
        klass("Handler", namespace="App"),
        klass("Request", namespace="Contracts"),
        klass("Request", namespace="Legacy"),
        usings=["Legacy"],
    )
    model = UnitSemanticModel.from_unit(compilation_unit)

    assert model.resolved_symbol(ref("Request", "App.Handler")) == _type("Legacy.Request")


def test_qualified_names_bind_through_their_qualifier() -> None:
    foo = klass("Foo", namespace="A")
    local_helper = klass("Helper", namespace="A")
    other_helper = klass("Helper", namespace="Other")
    model = UnitSemanticModel([foo, local_helper, other_helper])

    qualified = ref("Helper", "A.Foo", is_type=True, qualifier="Other")

    assert model.resolved_symbol(qualified) == _type("Other.Helper")
    assert model.resolved_symbol(ref("Helper", "A.Foo", is_type=True)) == _type("A.Helper")


def test_qualifiers_resolve_against_enclosing_namespaces() -> None:
    client = klass("Client", namespace="Company.Api")
    options = klass("Options", namespace="Company.Config")
    model = UnitSemanticModel([client, options])

    assert model.resolved_symbol(
        ref("Options", "Company.Api.Client", is_type=True, qualifier="Config")
    ) == _type("Company.Config.Options")
    assert model.resolved_symbol(
        ref("Options", "Company.Api.Client", is_type=True, qualifier="Missing")
    ) is None


def test_qualified_member_access_binds_to_the_named_class() -> None:
    caller = klass("Caller", namespace="App", members=[method("Create")])
    factory = klass("Factory", namespace="App", members=[method("Create")])
    model = UnitSemanticModel([caller, factory])

    assert model.resolved_symbol(ref("Create", "App.Caller", qualifier="Factory")) == SymbolId(
        SymbolKind.METHOD, "App.Factory.Create"
    )
    assert model.resolved_symbol(ref("Create", "App.Caller", qualifier="this")) == SymbolId(
        SymbolKind.METHOD, "App.Caller.Create"
    )
