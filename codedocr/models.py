"""Declaration model shared across codedocr components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class UsingDefinition:
    """A using directive found in a compilation unit."""

    name: str


@dataclass(frozen=True)
class DocumentationDefinition:
    """Normalised text of a documentation comment block."""

    comment: str = ""


@dataclass(frozen=True)
class PropertyDefinition:
    """Named, typed element: attribute argument, parameter or property."""

    attributes: Tuple["AttributeDefinition", ...]
    name: str
    type: str


@dataclass(frozen=True)
class AttributeDefinition:
    """An attribute application and its named arguments."""

    name: str
    arguments: Tuple[PropertyDefinition, ...] = ()


@dataclass(frozen=True)
class ClassPropertyDefinition(PropertyDefinition):
    """Property declared on a class, with its modifier flags."""

    is_public: bool = False
    is_static: bool = False
    is_readonly: bool = False
    is_virtual: bool = False
    is_override: bool = False
    is_sealed: bool = False
    is_abstract: bool = False
    is_extern: bool = False
    is_unsafe: bool = False
    is_partial: bool = False
    is_const: bool = False
    is_volatile: bool = False
    is_new: bool = False
    is_internal: bool = False
    is_protected: bool = False
    is_private: bool = False
    documentation: DocumentationDefinition = field(default_factory=DocumentationDefinition)


@dataclass(frozen=True)
class MethodDefinition:
    """Method declared on a class."""

    name: str
    return_type: str
    attributes: Tuple[AttributeDefinition, ...] = ()
    parameters: Tuple[PropertyDefinition, ...] = ()
    documentation: DocumentationDefinition = field(default_factory=DocumentationDefinition)
    is_public: bool = False
    is_static: bool = False
    is_virtual: bool = False
    is_override: bool = False
    is_abstract: bool = False
    is_extern: bool = False
    is_internal: bool = False
    is_protected: bool = False
    is_private: bool = False


@dataclass(frozen=True)
class ClassDefinition:
    """Class-level snapshot handed to the renderer."""

    name: str
    usings: Tuple[UsingDefinition, ...] = ()
    properties: Tuple[ClassPropertyDefinition, ...] = ()
    methods: Tuple[MethodDefinition, ...] = ()
    qualified_name: str = ""
    namespace: Optional[str] = None
    attributes: Tuple[AttributeDefinition, ...] = ()
    documentation: DocumentationDefinition = field(default_factory=DocumentationDefinition)
    references: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ReferenceEdge:
    """Directed fact: ``source`` names ``target`` through a resolvable symbol."""

    source: str
    target: str


@dataclass(frozen=True)
class ReferenceGraph:
    """Reference edges between the classes of one compilation unit."""

    edges: Tuple[ReferenceEdge, ...] = ()

    def has_edge(self, source: str, target: str) -> bool:
        return ReferenceEdge(source, target) in self.edges

    def outgoing(self, source: str) -> Tuple[str, ...]:
        return tuple(edge.target for edge in self.edges if edge.source == source)

    def incoming(self, target: str) -> Tuple[str, ...]:
        return tuple(edge.source for edge in self.edges if edge.target == target)


@dataclass(frozen=True)
class NamespaceDefinition:
    """All class definitions of one compilation unit."""

    name: Optional[str]
    classes: Tuple[ClassDefinition, ...] = ()
    path: Optional[str] = None
    graph: ReferenceGraph = field(default_factory=ReferenceGraph)


__all__ = [
    "AttributeDefinition",
    "ClassDefinition",
    "ClassPropertyDefinition",
    "DocumentationDefinition",
    "MethodDefinition",
    "NamespaceDefinition",
    "PropertyDefinition",
    "ReferenceEdge",
    "ReferenceGraph",
    "UsingDefinition",
]
