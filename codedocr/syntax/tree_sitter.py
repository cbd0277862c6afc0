"""Tree-sitter powered C# syntax tree provider."""

from __future__ import annotations

import re
import threading
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..logging import get_logger
from .nodes import (
    COMMENT_TRIVIA,
    DOCUMENTATION_TRIVIA,
    Attribute,
    AttributeArgument,
    AttributeList,
    ClassDeclaration,
    CompilationUnit,
    IdentifierName,
    Member,
    MethodDeclaration,
    Parameter,
    PropertyDeclaration,
    Trivia,
    UsingDirective,
)
from .provider import SyntaxProviderError

try:  # pragma: no cover - optional dependency
    from tree_sitter_language_pack import get_parser

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    get_parser = None  # type: ignore[assignment]
    TREE_SITTER_AVAILABLE = False


# language pack releases disagree on the C# grammar key
_GRAMMARS = ("c_sharp", "csharp")

_GENERIC_ARGUMENTS = re.compile(r"<[^<>]*>")
_WHITESPACE = re.compile(r"\s+")

_USING_NAME_TYPES = {"qualified_name", "identifier", "generic_name", "alias_qualified_name"}

# declarations whose ``name`` field introduces a name rather than referencing one
_DECLARING_PARENTS = {
    "class_declaration",
    "struct_declaration",
    "interface_declaration",
    "record_declaration",
    "enum_declaration",
    "enum_member_declaration",
    "delegate_declaration",
    "namespace_declaration",
    "file_scoped_namespace_declaration",
    "method_declaration",
    "constructor_declaration",
    "destructor_declaration",
    "property_declaration",
    "event_declaration",
    "indexer_declaration",
    "local_function_statement",
    "parameter",
    "type_parameter",
    "variable_declarator",
    "catch_declaration",
}

_TYPE_CONTEXTS = {
    "type_argument_list",
    "base_list",
    "array_type",
    "nullable_type",
    "pointer_type",
    "ref_type",
    "generic_name",
    "qualified_name",
    "typeof_expression",
    "type_parameter_constraint",
    "type_constraint",
}


@lru_cache(maxsize=1)
def tree_sitter_available() -> bool:
    """Return True when the C# grammar can actually be loaded."""
    if not TREE_SITTER_AVAILABLE:
        return False
    try:
        _load_parser()
    except SyntaxProviderError:  # pragma: no cover - grammar missing
        return False
    return True


def _load_parser():  # type: ignore[no-untyped-def]
    """Return a C# parser or raise :class:`SyntaxProviderError`.

    Language pack releases that download grammars on demand raise their own
    error types, which are wrapped as well.
    """
    last_error: Optional[Exception] = None
    for name in _GRAMMARS:
        try:
            return get_parser(name)  # type: ignore[misc]
        except Exception as exc:  # noqa: BLE001 - the pack raises LookupError or DownloadError
            last_error = exc
    raise SyntaxProviderError(
        f"No C# grammar in tree_sitter_language_pack (tried {', '.join(_GRAMMARS)}): {last_error}"
    ) from last_error


class TreeSitterSyntaxProvider:
    """Parses C# source into typed declaration nodes.

    One tree-sitter parser is kept per thread so units can be parsed from
    worker threads.
    """

    def __init__(self) -> None:
        self._local = threading.local()
        self.logger = get_logger("syntax")

    def parse(self, source: str, path: Optional[str] = None) -> CompilationUnit:
        source_bytes = source.encode("utf-8")
        tree = self._get_parser().parse(source_bytes)
        unit = _UnitReader(source_bytes, path).read(tree.root_node)
        self.logger.debug(
            "Parsed %s: %d usings, %d classes", path or "<memory>", len(unit.usings), len(unit.classes)
        )
        return unit

    def parse_file(self, path: Path) -> CompilationUnit:
        try:
            source = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise SyntaxProviderError(f"Cannot read {path}: {exc}") from exc
        return self.parse(source, str(path))

    def _get_parser(self):  # type: ignore[no-untyped-def]
        parser = getattr(self._local, "parser", None)
        if parser is not None:
            return parser
        if not TREE_SITTER_AVAILABLE:
            raise SyntaxProviderError(
                "tree_sitter_language_pack is not installed; C# sources cannot be parsed"
            )
        parser = _load_parser()
        self._local.parser = parser
        return parser


class _UnitReader:
    """Converts one concrete tree-sitter tree into a CompilationUnit."""

    def __init__(self, source_bytes: bytes, path: Optional[str]) -> None:
        self._source = source_bytes
        self._path = path
        self._namespaces: List[str] = []
        self._classes: List[Optional[ClassDeclaration]] = []

    def read(self, root) -> CompilationUnit:  # type: ignore[no-untyped-def]
        usings = tuple(
            UsingDirective(name=name)
            for name in (self._using_name(node) for node in _descendants(root, "using_directive"))
            if name
        )
        self._walk_container(root, namespace=None)
        return CompilationUnit(
            path=self._path,
            usings=usings,
            namespaces=tuple(self._namespaces),
            classes=tuple(c for c in self._classes if c is not None),
        )

    # ------------------------------------------------------------------
    # Declarations

    def _walk_container(self, node, namespace: Optional[str]) -> None:  # type: ignore[no-untyped-def]
        current = namespace
        for child in node.named_children:
            if child.type == "namespace_declaration":
                qualified = self._namespace_name(child, current)
                body = child.child_by_field_name("body")
                if body is not None:
                    self._walk_container(body, qualified)
            elif child.type == "file_scoped_namespace_declaration":
                current = self._namespace_name(child, current)
                # newer grammars nest the following declarations inside this node
                self._walk_container(child, current)
            elif child.type == "class_declaration":
                self._class(child, current, parent=None)

    def _namespace_name(self, node, parent: Optional[str]) -> Optional[str]:  # type: ignore[no-untyped-def]
        name_node = node.child_by_field_name("name")
        if name_node is None:
            for child in node.named_children:
                if child.type in ("qualified_name", "identifier"):
                    name_node = child
                    break
        if name_node is None:
            return parent
        name = self._text(name_node)
        qualified = f"{parent}.{name}" if parent else name
        self._namespaces.append(qualified)
        return qualified

    def _class(self, node, namespace: Optional[str], parent: Optional[str]) -> Optional[ClassDeclaration]:  # type: ignore[no-untyped-def]
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        name = self._text(name_node)
        if parent:
            qualified = f"{parent}.{name}"
        elif namespace:
            qualified = f"{namespace}.{name}"
        else:
            qualified = name

        # reserve the slot so outer classes precede nested ones
        slot = len(self._classes)
        self._classes.append(None)

        members: List[Member] = []
        nested: Dict[Tuple[int, int], ClassDeclaration] = {}
        body = node.child_by_field_name("body")
        if body is not None:
            for child in body.named_children:
                if child.type == "property_declaration":
                    prop = self._property(child)
                    if prop is not None:
                        members.append(prop)
                elif child.type == "method_declaration":
                    method = self._method(child)
                    if method is not None:
                        members.append(method)
                elif child.type == "class_declaration":
                    inner = self._class(child, namespace, parent=qualified)
                    if inner is not None:
                        members.append(inner)
                        nested[_span(child)] = inner

        declaration = ClassDeclaration(
            name=name,
            qualified_name=qualified,
            namespace=namespace,
            modifiers=self._modifiers(node),
            attribute_lists=self._attribute_lists(node),
            leading_trivia=self._leading_trivia(node),
            members=tuple(members),
            identifiers=tuple(self._identifiers(node, qualified, nested)),
        )
        self._classes[slot] = declaration
        return declaration

    def _property(self, node) -> Optional[PropertyDeclaration]:  # type: ignore[no-untyped-def]
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        type_node = node.child_by_field_name("type")
        return PropertyDeclaration(
            name=self._text(name_node),
            type=self._text(type_node) if type_node is not None else "",
            modifiers=self._modifiers(node),
            attribute_lists=self._attribute_lists(node),
            leading_trivia=self._leading_trivia(node),
        )

    def _method(self, node) -> Optional[MethodDeclaration]:  # type: ignore[no-untyped-def]
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        returns = node.child_by_field_name("returns") or node.child_by_field_name("type")
        parameters: List[Parameter] = []
        parameter_list = node.child_by_field_name("parameters")
        if parameter_list is not None:
            for child in parameter_list.named_children:
                if child.type != "parameter":
                    continue
                parameter_name = child.child_by_field_name("name")
                parameter_type = child.child_by_field_name("type")
                parameters.append(
                    Parameter(
                        name=self._text(parameter_name) if parameter_name is not None else "",
                        type=self._text(parameter_type) if parameter_type is not None else "",
                        attribute_lists=self._attribute_lists(child),
                    )
                )
        return MethodDeclaration(
            name=self._text(name_node),
            return_type=self._text(returns) if returns is not None else "",
            modifiers=self._modifiers(node),
            attribute_lists=self._attribute_lists(node),
            parameters=tuple(parameters),
            leading_trivia=self._leading_trivia(node),
        )

    # ------------------------------------------------------------------
    # Declaration parts

    def _modifiers(self, node) -> frozenset:  # type: ignore[no-untyped-def]
        return frozenset(
            self._text(child).strip() for child in node.children if child.type == "modifier"
        )

    def _attribute_lists(self, node) -> Tuple[AttributeList, ...]:  # type: ignore[no-untyped-def]
        lists: List[AttributeList] = []
        for child in node.children:
            if child.type != "attribute_list":
                continue
            attributes = tuple(
                self._attribute(attribute)
                for attribute in child.named_children
                if attribute.type == "attribute"
            )
            lists.append(AttributeList(attributes=attributes))
        return tuple(lists)

    def _attribute(self, node) -> Attribute:  # type: ignore[no-untyped-def]
        name_node = node.child_by_field_name("name")
        if name_node is None and node.named_children:
            name_node = node.named_children[0]
        arguments: List[AttributeArgument] = []
        for child in node.named_children:
            if child.type != "attribute_argument_list":
                continue
            for argument in child.named_children:
                if argument.type == "attribute_argument":
                    arguments.append(self._attribute_argument(argument))
        return Attribute(
            name=self._text(name_node) if name_node is not None else "",
            arguments=tuple(arguments),
        )

    def _attribute_argument(self, node) -> AttributeArgument:  # type: ignore[no-untyped-def]
        name_equals: Optional[str] = None
        expression_node = None
        children = node.children
        for index, child in enumerate(children):
            if child.type == "name_equals":
                identifier = child.named_children[0] if child.named_children else child
                name_equals = self._text(identifier)
            elif child.type == "name_colon":
                continue
            elif child.type == "=" and index > 0 and children[index - 1].type == "identifier":
                name_equals = self._text(children[index - 1])
            elif child.is_named and child.type != "comment":
                expression_node = child
        expression = self._text(expression_node if expression_node is not None else node)
        return AttributeArgument(expression=expression.strip(), name_equals=name_equals)

    def _leading_trivia(self, node) -> Tuple[Trivia, ...]:  # type: ignore[no-untyped-def]
        comments = []
        previous = node.prev_sibling
        while previous is not None and previous.type == "comment":
            before = previous.prev_sibling
            if (
                before is not None
                and before.type != "comment"
                and before.end_point[0] == previous.start_point[0]
            ):
                # trailing comment of the previous declaration
                break
            comments.append(previous)
            previous = before
        comments.reverse()

        trivia: List[Trivia] = []
        doc_lines: List[str] = []
        for comment in comments:
            text = self._text(comment)
            if text.lstrip().startswith("///"):
                doc_lines.append(text)
                continue
            if doc_lines:
                trivia.append(Trivia(DOCUMENTATION_TRIVIA, "\n".join(doc_lines)))
                doc_lines = []
            kind = DOCUMENTATION_TRIVIA if text.lstrip().startswith("/**") else COMMENT_TRIVIA
            trivia.append(Trivia(kind, text))
        if doc_lines:
            trivia.append(Trivia(DOCUMENTATION_TRIVIA, "\n".join(doc_lines)))
        return tuple(trivia)

    # ------------------------------------------------------------------
    # Identifier references

    def _identifiers(self, node, scope: str, nested: Dict[Tuple[int, int], ClassDeclaration]) -> List[IdentifierName]:  # type: ignore[no-untyped-def]
        found: List[IdentifierName] = []
        stack = list(reversed(node.children))
        while stack:
            current = stack.pop()
            inner = nested.get(_span(current)) if current.type == "class_declaration" else None
            if inner is not None:
                found.extend(inner.identifiers)
                continue
            if current.type == "identifier":
                if not _is_declared_name(current):
                    found.append(
                        IdentifierName(
                            text=self._text(current),
                            scope=scope,
                            is_type=_is_type_position(current),
                            line=current.start_point[0] + 1,
                            qualifier=self._qualifier(current),
                        )
                    )
                continue
            stack.extend(reversed(current.children))
        return found

    def _qualifier(self, node) -> Optional[str]:  # type: ignore[no-untyped-def]
        left = _qualifier_node(node)
        if left is None:
            return None
        text = _GENERIC_ARGUMENTS.sub("", _WHITESPACE.sub("", self._text(left)))
        while _GENERIC_ARGUMENTS.search(text):
            text = _GENERIC_ARGUMENTS.sub("", text)
        text = text.replace("global::", "").replace("::", ".")
        return text or None

    def _using_name(self, node) -> str:  # type: ignore[no-untyped-def]
        candidates = [child for child in node.named_children if child.type in _USING_NAME_TYPES]
        return self._text(candidates[-1]) if candidates else ""

    def _text(self, node) -> str:  # type: ignore[no-untyped-def]
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def _descendants(node, node_type: str):  # type: ignore[no-untyped-def]
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == node_type:
            yield current
            continue
        stack.extend(reversed(current.children))


def _span(node) -> Tuple[int, int]:  # type: ignore[no-untyped-def]
    return (node.start_byte, node.end_byte)


def _same_node(left, right) -> bool:  # type: ignore[no-untyped-def]
    return right is not None and _span(left) == _span(right) and left.type == right.type


def _is_declared_name(node) -> bool:  # type: ignore[no-untyped-def]
    parent = node.parent
    if parent is None or parent.type not in _DECLARING_PARENTS:
        return False
    if _same_node(node, parent.child_by_field_name("name")):
        return True
    # older grammars leave the declarator name unlabelled
    if parent.type == "variable_declarator" and parent.named_children:
        return _same_node(node, parent.named_children[0])
    return False


def _qualifier_node(node):  # type: ignore[no-untyped-def]
    """Return the left-hand side of the dotted name ``node`` ends, if any."""
    current = node
    parent = node.parent
    if parent is not None and parent.type == "generic_name":
        current, parent = parent, parent.parent
    if parent is None:
        return None
    if parent.type == "qualified_name":
        right = parent.child_by_field_name("name")
        left = parent.child_by_field_name("qualifier")
        if right is None and len(parent.named_children) == 2:
            # older grammars leave both halves unlabelled
            left, right = parent.named_children
        return left if _same_node(current, right) else None
    if parent.type == "member_access_expression":
        if _same_node(current, parent.child_by_field_name("name")):
            return parent.child_by_field_name("expression")
    return None


def _is_type_position(node) -> bool:  # type: ignore[no-untyped-def]
    parent = node.parent
    if parent is None:
        return False
    if parent.type in _TYPE_CONTEXTS:
        return True
    for field_name in ("type", "returns"):
        if _same_node(node, parent.child_by_field_name(field_name)):
            return True
    return False


__all__ = ["TREE_SITTER_AVAILABLE", "TreeSitterSyntaxProvider", "tree_sitter_available"]
