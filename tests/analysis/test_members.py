"""Tests for member definition builders."""

from __future__ import annotations

import pytest

from codedocr.analysis import MemberBuilder, build_method, build_parameter, build_property
from codedocr.models import AttributeDefinition, ClassPropertyDefinition, PropertyDefinition
from codedocr.syntax import Parameter, UsingDirective

from tests._fixtures.nodes import attribute, doc, method, prop


def test_build_property_copies_name_type_and_flags() -> None:
    node = prop(
        "Id",
        "int",
        ("public",),
        attributes=[attribute("Key")],
        trivia=[doc("/// Identifier")],
    )

    definition = build_property(node)

    assert isinstance(definition, ClassPropertyDefinition)
    assert definition.name == "Id"
    assert definition.type == "int"
    assert definition.is_public is True
    assert definition.is_private is False
    assert definition.attributes == (AttributeDefinition(name="Key"),)
    assert definition.documentation.comment == "Identifier"


def test_build_method_maps_parameters_in_order() -> None:
    node = method(
        "Save",
        "Task<bool>",
        ("public", "virtual"),
        parameters=[
            Parameter("order", "Order", attribute_lists=(attribute("FromBody"),)),
            Parameter("token", "CancellationToken"),
        ],
    )

    definition = build_method(node)

    assert definition.return_type == "Task<bool>"
    assert definition.is_virtual is True
    assert definition.is_static is False
    assert definition.parameters == (
        PropertyDefinition(attributes=(AttributeDefinition(name="FromBody"),), name="order", type="Order"),
        PropertyDefinition(attributes=(), name="token", type="CancellationToken"),
    )


def test_method_without_documentation_has_empty_comment() -> None:
    assert build_method(method("Run")).documentation.comment == ""


def test_build_parameter() -> None:
    definition = build_parameter(Parameter("count", "int"))

    assert definition == PropertyDefinition(attributes=(), name="count", type="int")


def test_member_builder_dispatches_on_node_kind() -> None:
    builder = MemberBuilder(documentation_separator=" ")

    definition = builder.visit(prop("Name", "string", trivia=[doc("/// a\n/// b")]))

    assert definition.documentation.comment == "a b"


def test_member_builder_rejects_unknown_nodes() -> None:
    with pytest.raises(TypeError):
        MemberBuilder().visit(UsingDirective("System"))
