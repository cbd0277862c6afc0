"""Directed class reference graph for one compilation unit."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ..logging import get_logger
from ..models import ReferenceEdge, ReferenceGraph
from ..semantics.symbols import SemanticModel, SymbolId
from ..syntax.nodes import ClassDeclaration
from .errors import MissingDeclaredSymbolError


class ClassReferenceGraphBuilder:
    """Finds which classes of a unit name which other classes.

    ``A -> B`` holds when at least one identifier in ``A``'s body binds to
    ``B``'s declared symbol. Identifiers the semantic model cannot bind are
    ignored. Self pairs are never considered. Edge endpoints are qualified
    names, so same-named classes of different namespaces stay distinct.
    """

    def __init__(self, semantic_model: SemanticModel) -> None:
        self.semantic_model = semantic_model
        self.logger = get_logger("analysis.references")

    def declared_symbol(self, declaration: ClassDeclaration) -> SymbolId:
        symbol = self.semantic_model.declared_symbol(declaration)
        if symbol is None:
            raise MissingDeclaredSymbolError(declaration.qualified_name or declaration.name)
        return symbol

    def has_reference(self, source: ClassDeclaration, target: ClassDeclaration) -> bool:
        """Return True when ``source`` references ``target``."""
        return self._references_symbol(source, self.declared_symbol(target))

    def build(self, classes: Sequence[ClassDeclaration]) -> ReferenceGraph:
        symbols: Dict[int, SymbolId] = {
            index: self.declared_symbol(declaration) for index, declaration in enumerate(classes)
        }
        edges: List[ReferenceEdge] = []
        for source_index, source in enumerate(classes):
            for target_index, target in enumerate(classes):
                # partial declarations share one symbol
                if source_index == target_index or symbols[source_index] == symbols[target_index]:
                    continue
                edge = ReferenceEdge(source=_edge_key(source), target=_edge_key(target))
                if edge in edges:
                    continue
                if self._references_symbol(source, symbols[target_index]):
                    edges.append(edge)
        self.logger.debug("Found %d reference edges among %d classes", len(edges), len(classes))
        return ReferenceGraph(edges=tuple(edges))

    def _references_symbol(self, source: ClassDeclaration, target_symbol: SymbolId) -> bool:
        for identifier in source.identifiers:
            symbol = self.semantic_model.resolved_symbol(identifier)
            if symbol is None or not symbol.is_named_type:
                continue
            if symbol == target_symbol:
                return True
        return False


def _edge_key(declaration: ClassDeclaration) -> str:
    return declaration.qualified_name or declaration.name


__all__ = ["ClassReferenceGraphBuilder"]
