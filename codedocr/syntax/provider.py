"""Syntax tree provider contract."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from .nodes import CompilationUnit


class SyntaxProviderError(RuntimeError):
    """Raised when source text cannot be turned into a compilation unit."""


class SyntaxTreeProvider(Protocol):
    def parse(self, source: str, path: Optional[str] = None) -> CompilationUnit:
        """Parse source text into typed declaration nodes."""

    def parse_file(self, path: Path) -> CompilationUnit:
        """Read and parse a source file."""


__all__ = ["SyntaxProviderError", "SyntaxTreeProvider"]
