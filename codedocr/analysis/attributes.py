"""Attribute list extraction."""

from __future__ import annotations

from typing import Iterable, Tuple

from ..models import AttributeDefinition, PropertyDefinition
from ..syntax.nodes import Attribute, AttributeArgument, AttributeList


def extract_attributes(attribute_lists: Iterable[AttributeList]) -> Tuple[AttributeDefinition, ...]:
    """Return one definition per attribute application, in source order.

    Only ``Name = value`` arguments are kept; positional and ``name: value``
    arguments have no definition.
    """
    return tuple(
        _attribute_definition(attribute)
        for attribute_list in attribute_lists
        for attribute in attribute_list.attributes
    )


def _attribute_definition(attribute: Attribute) -> AttributeDefinition:
    arguments = tuple(
        _argument_definition(argument)
        for argument in attribute.arguments
        if argument.name_equals is not None
    )
    return AttributeDefinition(name=attribute.name, arguments=arguments)


def _argument_definition(argument: AttributeArgument) -> PropertyDefinition:
    return PropertyDefinition(
        attributes=(),
        name=argument.name_equals or "",
        type=argument.expression,
    )


__all__ = ["extract_attributes"]
