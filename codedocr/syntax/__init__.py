"""Typed syntax nodes and the tree-sitter backed provider."""

from .nodes import (
    Attribute,
    AttributeArgument,
    AttributeList,
    ClassDeclaration,
    CompilationUnit,
    IdentifierName,
    MethodDeclaration,
    Parameter,
    PropertyDeclaration,
    SyntaxVisitor,
    Trivia,
    UsingDirective,
)
from .provider import SyntaxProviderError, SyntaxTreeProvider
from .tree_sitter import TREE_SITTER_AVAILABLE, TreeSitterSyntaxProvider, tree_sitter_available

__all__ = [
    "Attribute",
    "AttributeArgument",
    "AttributeList",
    "ClassDeclaration",
    "CompilationUnit",
    "IdentifierName",
    "MethodDeclaration",
    "Parameter",
    "PropertyDeclaration",
    "SyntaxProviderError",
    "SyntaxTreeProvider",
    "SyntaxVisitor",
    "TREE_SITTER_AVAILABLE",
    "TreeSitterSyntaxProvider",
    "Trivia",
    "UsingDirective",
    "tree_sitter_available",
]
