"""Declaration model and class reference analysis."""

from .attributes import extract_attributes
from .builder import DeclarationModelBuilder, build_class_definitions
from .documentation import (
    DocumentationSummary,
    associate_documentation,
    normalize_documentation,
    parse_documentation,
)
from .errors import AnalysisError, MissingDeclaredSymbolError
from .members import MemberBuilder, build_method, build_parameter, build_property
from .modifiers import METHOD_FLAGS, PROPERTY_FLAGS, derive_modifier_flags
from .references import ClassReferenceGraphBuilder

__all__ = [
    "AnalysisError",
    "ClassReferenceGraphBuilder",
    "DeclarationModelBuilder",
    "DocumentationSummary",
    "METHOD_FLAGS",
    "MemberBuilder",
    "MissingDeclaredSymbolError",
    "PROPERTY_FLAGS",
    "associate_documentation",
    "build_class_definitions",
    "build_method",
    "build_parameter",
    "build_property",
    "derive_modifier_flags",
    "extract_attributes",
    "normalize_documentation",
    "parse_documentation",
]
