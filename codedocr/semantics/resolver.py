"""In-unit name binding for class references."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..logging import get_logger
from ..syntax.nodes import ClassDeclaration, CompilationUnit, IdentifierName
from .symbols import SymbolId, SymbolKind


class UnitSemanticModel:
    """Binds identifiers to the declarations of a single compilation unit.

    Lookup order for an identifier used inside class ``C``:

    1. a property or method declared on ``C`` or an enclosing class, unless
       the identifier sits in a type position;
    2. a class nested in ``C`` or an enclosing class;
    3. a class of ``C``'s namespace or any enclosing namespace;
    4. a class of a namespace imported by a using directive;
    5. the only class of the unit carrying that simple name.

    A qualified identifier such as ``Other.Helper`` is bound only through
    its qualifier, tried against the enclosing classes, the enclosing
    namespaces, the imported namespaces and the global namespace in that
    order. ``this.X`` and ``base.X`` bind to members of the enclosing
    classes. Anything else is unresolved. Types declared in other units are never
    bound.
    """

    def __init__(self, classes: Sequence[ClassDeclaration], usings: Iterable[str] = ()) -> None:
        self._classes: Dict[str, ClassDeclaration] = {}
        self._members: Dict[str, Dict[str, SymbolKind]] = {}
        self._by_simple_name: Dict[str, List[str]] = defaultdict(list)
        for declaration in classes:
            if declaration.qualified_name not in self._classes:
                self._classes[declaration.qualified_name] = declaration
                self._by_simple_name[declaration.name].append(declaration.qualified_name)
            members = self._members.setdefault(declaration.qualified_name, {})
            for prop in declaration.properties:
                members[prop.name] = SymbolKind.PROPERTY
            for method in declaration.methods:
                members.setdefault(method.name, SymbolKind.METHOD)
        self._usings = [name for name in usings if name]
        self._logger = get_logger("semantics")

    @classmethod
    def from_unit(cls, unit: CompilationUnit) -> "UnitSemanticModel":
        return cls(unit.classes, (using.name for using in unit.usings))

    def declared_symbol(self, declaration: ClassDeclaration) -> Optional[SymbolId]:
        if self._classes.get(declaration.qualified_name) is None:
            return None
        return SymbolId(SymbolKind.NAMED_TYPE, declaration.qualified_name)

    def resolved_symbol(self, identifier: IdentifierName) -> Optional[SymbolId]:
        text = identifier.text
        enclosing = self._enclosing_classes(identifier.scope)
        if identifier.qualifier:
            return self._resolve_qualified(identifier, enclosing)

        if not identifier.is_type:
            for qualified in enclosing:
                member_kind = self._members.get(qualified, {}).get(text)
                if member_kind is not None:
                    return SymbolId(member_kind, f"{qualified}.{text}")

        for qualified in enclosing:
            candidate = f"{qualified}.{text}"
            if candidate in self._classes:
                return SymbolId(SymbolKind.NAMED_TYPE, candidate)

        scope_class = self._classes.get(identifier.scope)
        namespace = scope_class.namespace if scope_class is not None else None
        for prefix in _namespace_prefixes(namespace):
            candidate = f"{prefix}.{text}" if prefix else text
            if candidate in self._classes:
                return SymbolId(SymbolKind.NAMED_TYPE, candidate)

        for imported in self._usings:
            candidate = f"{imported}.{text}"
            if candidate in self._classes:
                return SymbolId(SymbolKind.NAMED_TYPE, candidate)

        matches = self._by_simple_name.get(text, [])
        if len(set(matches)) == 1:
            return SymbolId(SymbolKind.NAMED_TYPE, matches[0])
        if matches:
            self._logger.debug("Ambiguous identifier %s in %s", text, identifier.scope)
        return None

    def _resolve_qualified(
        self, identifier: IdentifierName, enclosing: List[str]
    ) -> Optional[SymbolId]:
        text = identifier.text
        qualifier = identifier.qualifier or ""
        if qualifier in ("this", "base"):
            for qualified in enclosing:
                member_kind = self._members.get(qualified, {}).get(text)
                if member_kind is not None:
                    return SymbolId(member_kind, f"{qualified}.{text}")
            return None

        scope_class = self._classes.get(identifier.scope)
        namespace = scope_class.namespace if scope_class is not None else None
        prefixes = enclosing + [prefix for prefix in _namespace_prefixes(namespace) if prefix]
        prefixes += self._usings + [""]
        for prefix in prefixes:
            owner = f"{prefix}.{qualifier}" if prefix else qualifier
            candidate = f"{owner}.{text}"
            if candidate in self._classes:
                return SymbolId(SymbolKind.NAMED_TYPE, candidate)
            member_kind = self._members.get(owner, {}).get(text)
            if member_kind is not None and not identifier.is_type:
                return SymbolId(member_kind, candidate)
        return None

    def _enclosing_classes(self, scope: str) -> List[str]:
        """Return ``scope`` and every enclosing class, innermost first."""
        result: List[str] = []
        seen: Set[str] = set()
        current = scope
        while current:
            if current in self._classes and current not in seen:
                result.append(current)
                seen.add(current)
            if "." not in current:
                break
            current = current.rsplit(".", 1)[0]
        return result


def _namespace_prefixes(namespace: Optional[str]) -> List[str]:
    if not namespace:
        return [""]
    parts = namespace.split(".")
    prefixes = [".".join(parts[:index]) for index in range(len(parts), 0, -1)]
    prefixes.append("")
    return prefixes


__all__ = ["UnitSemanticModel"]
