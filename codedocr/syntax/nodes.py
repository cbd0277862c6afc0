"""Typed declaration nodes produced by a syntax tree provider.

The node set is closed: using directives, classes, properties, methods,
parameters, attribute lists, trivia and identifier references. Every node
carries a ``kind`` tag which :class:`SyntaxVisitor` dispatches on, so
consumers never filter a generic tree by runtime type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, FrozenSet, Generic, Optional, Tuple, TypeVar, Union

DOCUMENTATION_TRIVIA = "documentation"
COMMENT_TRIVIA = "comment"


@dataclass(frozen=True)
class Trivia:
    """Non-semantic source text attached in front of a declaration."""

    kind: ClassVar[str] = "trivia"

    trivia_kind: str
    text: str

    @property
    def is_documentation(self) -> bool:
        return self.trivia_kind == DOCUMENTATION_TRIVIA


@dataclass(frozen=True)
class AttributeArgument:
    """One argument of an attribute application.

    ``name_equals`` is only set for the ``Name = value`` form.
    """

    kind: ClassVar[str] = "attribute_argument"

    expression: str
    name_equals: Optional[str] = None


@dataclass(frozen=True)
class Attribute:
    kind: ClassVar[str] = "attribute"

    name: str
    arguments: Tuple[AttributeArgument, ...] = ()


@dataclass(frozen=True)
class AttributeList:
    kind: ClassVar[str] = "attribute_list"

    attributes: Tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class IdentifierName:
    """Identifier reference inside a class body.

    ``scope`` is the qualified name of the innermost enclosing class and
    ``is_type`` marks identifiers written in a type position. ``qualifier``
    holds the left-hand side of a dotted name (``Other`` in ``Other.Helper``),
    with type arguments and ``global::`` removed.
    """

    kind: ClassVar[str] = "identifier"

    text: str
    scope: str
    is_type: bool = False
    line: int = 0
    qualifier: Optional[str] = None


@dataclass(frozen=True)
class UsingDirective:
    kind: ClassVar[str] = "using"

    name: str


@dataclass(frozen=True)
class Parameter:
    kind: ClassVar[str] = "parameter"

    name: str
    type: str
    attribute_lists: Tuple[AttributeList, ...] = ()


@dataclass(frozen=True)
class PropertyDeclaration:
    kind: ClassVar[str] = "property"

    name: str
    type: str
    modifiers: FrozenSet[str] = frozenset()
    attribute_lists: Tuple[AttributeList, ...] = ()
    leading_trivia: Tuple[Trivia, ...] = ()


@dataclass(frozen=True)
class MethodDeclaration:
    kind: ClassVar[str] = "method"

    name: str
    return_type: str
    modifiers: FrozenSet[str] = frozenset()
    attribute_lists: Tuple[AttributeList, ...] = ()
    parameters: Tuple[Parameter, ...] = ()
    leading_trivia: Tuple[Trivia, ...] = ()


@dataclass(frozen=True)
class ClassDeclaration:
    """A class declaration.

    ``members`` holds the direct members in declaration order (nested
    classes included as members). ``identifiers`` holds every identifier
    reference of the whole class subtree, nested declarations included,
    in source order.
    """

    kind: ClassVar[str] = "class"

    name: str
    qualified_name: str
    namespace: Optional[str] = None
    modifiers: FrozenSet[str] = frozenset()
    attribute_lists: Tuple[AttributeList, ...] = ()
    leading_trivia: Tuple[Trivia, ...] = ()
    members: Tuple["Member", ...] = ()
    identifiers: Tuple[IdentifierName, ...] = ()

    @property
    def properties(self) -> Tuple[PropertyDeclaration, ...]:
        return tuple(m for m in self.members if m.kind == PropertyDeclaration.kind)  # type: ignore[misc]

    @property
    def methods(self) -> Tuple[MethodDeclaration, ...]:
        return tuple(m for m in self.members if m.kind == MethodDeclaration.kind)  # type: ignore[misc]


Member = Union[PropertyDeclaration, MethodDeclaration, ClassDeclaration]


@dataclass(frozen=True)
class CompilationUnit:
    """One source file worth of declarations.

    ``usings`` covers every using directive in the file, including those
    nested in namespace blocks. ``classes`` lists every class declaration,
    nested ones included, in source order.
    """

    kind: ClassVar[str] = "compilation_unit"

    path: Optional[str] = None
    usings: Tuple[UsingDirective, ...] = ()
    namespaces: Tuple[str, ...] = ()
    classes: Tuple[ClassDeclaration, ...] = ()


Node = Union[
    Trivia,
    AttributeArgument,
    Attribute,
    AttributeList,
    IdentifierName,
    UsingDirective,
    Parameter,
    PropertyDeclaration,
    MethodDeclaration,
    ClassDeclaration,
    CompilationUnit,
]

_T = TypeVar("_T")


class SyntaxVisitor(Generic[_T]):
    """Dispatches ``visit`` to ``visit_<kind>`` methods."""

    def visit(self, node: Node) -> _T:
        method = getattr(self, f"visit_{node.kind}", None)
        if method is None:
            return self.generic_visit(node)
        return method(node)

    def generic_visit(self, node: Node) -> _T:
        raise TypeError(f"{type(self).__name__} cannot visit {node.kind!r} nodes")


__all__ = [
    "COMMENT_TRIVIA",
    "DOCUMENTATION_TRIVIA",
    "Attribute",
    "AttributeArgument",
    "AttributeList",
    "ClassDeclaration",
    "CompilationUnit",
    "IdentifierName",
    "Member",
    "MethodDeclaration",
    "Node",
    "Parameter",
    "PropertyDeclaration",
    "SyntaxVisitor",
    "Trivia",
    "UsingDirective",
]
