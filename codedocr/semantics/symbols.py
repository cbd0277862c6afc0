"""Symbol identity and the semantic model contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from ..syntax.nodes import ClassDeclaration, IdentifierName


class SymbolKind(str, Enum):
    NAMED_TYPE = "named_type"
    PROPERTY = "property"
    METHOD = "method"


@dataclass(frozen=True)
class SymbolId:
    """Opaque symbol identity; two symbols are the same iff their ids are equal."""

    kind: SymbolKind
    name: str

    @property
    def is_named_type(self) -> bool:
        return self.kind is SymbolKind.NAMED_TYPE


class SemanticModel(Protocol):
    """Contract the analysis core queries for symbol information."""

    def declared_symbol(self, declaration: ClassDeclaration) -> Optional[SymbolId]:
        """Return the symbol a class declaration introduces."""

    def resolved_symbol(self, identifier: IdentifierName) -> Optional[SymbolId]:
        """Return the symbol an identifier binds to, or None when unresolved."""


__all__ = ["SemanticModel", "SymbolId", "SymbolKind"]
