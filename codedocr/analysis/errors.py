"""Errors raised while analysing a compilation unit."""

from __future__ import annotations


class AnalysisError(RuntimeError):
    """Raised when a compilation unit cannot be analysed."""


class MissingDeclaredSymbolError(AnalysisError):
    """Raised when the semantic model has no symbol for a class declaration."""

    def __init__(self, class_name: str) -> None:
        super().__init__(f"No declared symbol for class '{class_name}'")
        self.class_name = class_name


__all__ = ["AnalysisError", "MissingDeclaredSymbolError"]
