"""Builders for property, method and parameter definitions."""

from __future__ import annotations

from typing import Union

from ..models import ClassPropertyDefinition, MethodDefinition, PropertyDefinition
from ..syntax.nodes import MethodDeclaration, Parameter, PropertyDeclaration, SyntaxVisitor
from .attributes import extract_attributes
from .documentation import DEFAULT_SEPARATOR, associate_documentation
from .modifiers import METHOD_FLAGS, PROPERTY_FLAGS, derive_modifier_flags

MemberDefinition = Union[ClassPropertyDefinition, MethodDefinition, PropertyDefinition]


class MemberBuilder(SyntaxVisitor[MemberDefinition]):
    """Turns member declaration nodes into definitions."""

    def __init__(self, documentation_separator: str = DEFAULT_SEPARATOR) -> None:
        self.documentation_separator = documentation_separator

    def visit_property(self, node: PropertyDeclaration) -> ClassPropertyDefinition:
        flags = derive_modifier_flags(node.modifiers, PROPERTY_FLAGS)
        return ClassPropertyDefinition(
            attributes=extract_attributes(node.attribute_lists),
            name=node.name,
            type=node.type,
            documentation=associate_documentation(
                node.leading_trivia, self.documentation_separator
            ),
            **flags,
        )

    def visit_method(self, node: MethodDeclaration) -> MethodDefinition:
        flags = derive_modifier_flags(node.modifiers, METHOD_FLAGS)
        return MethodDefinition(
            name=node.name,
            return_type=node.return_type,
            attributes=extract_attributes(node.attribute_lists),
            parameters=tuple(self.visit_parameter(parameter) for parameter in node.parameters),
            documentation=associate_documentation(
                node.leading_trivia, self.documentation_separator
            ),
            **flags,
        )

    def visit_parameter(self, node: Parameter) -> PropertyDefinition:
        return PropertyDefinition(
            attributes=extract_attributes(node.attribute_lists),
            name=node.name,
            type=node.type,
        )


_DEFAULT_BUILDER = MemberBuilder()


def build_property(node: PropertyDeclaration) -> ClassPropertyDefinition:
    return _DEFAULT_BUILDER.visit_property(node)


def build_method(node: MethodDeclaration) -> MethodDefinition:
    return _DEFAULT_BUILDER.visit_method(node)


def build_parameter(node: Parameter) -> PropertyDefinition:
    return _DEFAULT_BUILDER.visit_parameter(node)


__all__ = [
    "MemberBuilder",
    "MemberDefinition",
    "build_method",
    "build_parameter",
    "build_property",
]
