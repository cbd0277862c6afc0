"""Markdown rendering for declaration models."""

from .describer import SourceDescriber
from .renderer import (
    GRAPH_PAGE,
    MarkdownRenderer,
    RenderedPage,
    create_environment,
    mermaid_id,
    modifier_keywords,
)

__all__ = [
    "GRAPH_PAGE",
    "MarkdownRenderer",
    "RenderedPage",
    "SourceDescriber",
    "create_environment",
    "mermaid_id",
    "modifier_keywords",
]
