"""Semantic model contract and the bundled in-unit resolver."""

from .resolver import UnitSemanticModel
from .symbols import SemanticModel, SymbolId, SymbolKind

__all__ = ["SemanticModel", "SymbolId", "SymbolKind", "UnitSemanticModel"]
