"""Class-level declaration model builder."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..logging import get_logger
from ..models import ClassDefinition, NamespaceDefinition, ReferenceGraph, UsingDefinition
from ..semantics.symbols import SemanticModel
from ..syntax.nodes import ClassDeclaration, CompilationUnit
from .attributes import extract_attributes
from .documentation import DEFAULT_SEPARATOR, associate_documentation
from .members import MemberBuilder
from .references import ClassReferenceGraphBuilder


class DeclarationModelBuilder:
    """Builds class definitions for every class of a compilation unit."""

    def __init__(
        self,
        semantic_model: SemanticModel,
        *,
        reference_builder: ClassReferenceGraphBuilder | None = None,
        member_builder: MemberBuilder | None = None,
        documentation_separator: str = DEFAULT_SEPARATOR,
        include_references: bool = True,
    ) -> None:
        self.semantic_model = semantic_model
        self.reference_builder = reference_builder or ClassReferenceGraphBuilder(semantic_model)
        self.member_builder = member_builder or MemberBuilder(documentation_separator)
        self.documentation_separator = documentation_separator
        self.include_references = include_references
        self.logger = get_logger("analysis.builder")

    def build_class_definitions(self, unit: CompilationUnit) -> List[ClassDefinition]:
        """Return one definition per class declaration, in source order."""
        definitions, _ = self._build(unit)
        return definitions

    def build_namespace(self, unit: CompilationUnit) -> NamespaceDefinition:
        """Return the unit's class definitions together with its reference graph."""
        definitions, graph = self._build(unit)
        return NamespaceDefinition(
            name=unit.namespaces[0] if unit.namespaces else None,
            classes=tuple(definitions),
            path=unit.path,
            graph=graph,
        )

    def build_usings(self, unit: CompilationUnit) -> Tuple[UsingDefinition, ...]:
        return tuple(UsingDefinition(name=using.name) for using in unit.usings)

    def build_class(
        self,
        declaration: ClassDeclaration,
        usings: Tuple[UsingDefinition, ...],
        references: Tuple[str, ...] = (),
    ) -> ClassDefinition:
        properties = tuple(self.member_builder.visit(node) for node in declaration.properties)
        methods = tuple(self.member_builder.visit(node) for node in declaration.methods)
        self.logger.debug(
            "Built class %s with %d properties and %d methods",
            declaration.qualified_name,
            len(properties),
            len(methods),
        )
        return ClassDefinition(
            name=declaration.name,
            usings=usings,
            properties=properties,  # type: ignore[arg-type]
            methods=methods,  # type: ignore[arg-type]
            qualified_name=declaration.qualified_name,
            namespace=declaration.namespace,
            attributes=extract_attributes(declaration.attribute_lists),
            documentation=associate_documentation(
                declaration.leading_trivia, self.documentation_separator
            ),
            references=references,
        )

    def _build(self, unit: CompilationUnit) -> Tuple[List[ClassDefinition], ReferenceGraph]:
        classes = list(unit.classes)
        graph = (
            self.reference_builder.build(classes) if self.include_references else ReferenceGraph()
        )
        usings = self.build_usings(unit)
        definitions = [
            self.build_class(
                declaration, usings, graph.outgoing(declaration.qualified_name or declaration.name)
            )
            for declaration in classes
        ]
        self.logger.debug(
            "Built %d class definitions for %s", len(definitions), unit.path or "<memory>"
        )
        return definitions, graph


def build_class_definitions(
    unit: CompilationUnit,
    semantic_model: SemanticModel,
    *,
    documentation_separator: Optional[str] = None,
) -> List[ClassDefinition]:
    """Build class definitions for ``unit`` using ``semantic_model``."""
    builder = DeclarationModelBuilder(
        semantic_model,
        documentation_separator=documentation_separator or DEFAULT_SEPARATOR,
    )
    return builder.build_class_definitions(unit)


__all__ = ["DeclarationModelBuilder", "build_class_definitions"]
