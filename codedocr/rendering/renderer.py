"""Markdown rendering of declaration models with Jinja templates."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Iterable, List, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..analysis.documentation import parse_documentation
from ..logging import get_logger
from ..models import ClassDefinition, NamespaceDefinition

_DEFAULT_TEMPLATES = Path(__file__).with_name("templates")
_MERMAID_INVALID = re.compile(r"[^A-Za-z0-9_]")
GRAPH_PAGE = "references.md"


@dataclass(frozen=True)
class RenderedPage:
    """One markdown page ready to be written to disk."""

    filename: str
    text: str


def modifier_keywords(definition: object) -> List[str]:
    """Return the modifier keywords whose ``is_*`` flag is set, in flag order."""
    keywords: List[str] = []
    for item in fields(definition):  # type: ignore[arg-type]
        if item.name.startswith("is_") and getattr(definition, item.name):
            keywords.append(item.name[3:])
    return keywords


def mermaid_id(name: str) -> str:
    """Convert a class name into a valid Mermaid node id."""
    value = _MERMAID_INVALID.sub("_", name)
    if value and value[0].isdigit():
        value = "_" + value
    return value


def documentation_summary(comment: str) -> str:
    return parse_documentation(comment).summary


def create_environment(templates_dir: Path | None = None) -> Environment:
    """Build the Jinja environment, preferring templates in ``templates_dir``."""
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(_DEFAULT_TEMPLATES))
    # ensure uniqueness preserving order
    ordered = list(dict.fromkeys(directories))
    env = Environment(
        loader=FileSystemLoader(ordered),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["modifiers"] = modifier_keywords
    env.filters["mermaid_id"] = mermaid_id
    env.filters["summary"] = documentation_summary
    return env


class MarkdownRenderer:
    """Renders class definitions and reference graphs into markdown pages."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = create_environment(templates_dir)
        self.logger = get_logger("rendering")

    def render_class(self, definition: ClassDefinition) -> str:
        template = self._env.get_template("class.md.j2")
        return template.render(cls=definition).strip() + "\n"

    def render_graph(self, namespaces: Sequence[NamespaceDefinition]) -> str:
        template = self._env.get_template("graph.md.j2")
        return template.render(namespaces=namespaces).strip() + "\n"

    def render_pages(self, namespaces: Sequence[NamespaceDefinition]) -> List[RenderedPage]:
        """Render one page per class, named ``<index>_<ClassName>.md``, plus the graph page."""
        pages: List[RenderedPage] = []
        index = 0
        for namespace in namespaces:
            for definition in namespace.classes:
                pages.append(
                    RenderedPage(
                        filename=f"{index}_{definition.name}.md",
                        text=self.render_class(definition),
                    )
                )
                index += 1
        if namespaces:
            pages.append(RenderedPage(filename=GRAPH_PAGE, text=self.render_graph(namespaces)))
        self.logger.debug("Rendered %d pages", len(pages))
        return pages

    def write_pages(self, pages: Iterable[RenderedPage], output_dir: Path) -> List[Path]:
        output_dir.mkdir(parents=True, exist_ok=True)
        written: List[Path] = []
        for page in pages:
            target = output_dir / page.filename
            target.write_text(page.text, encoding="utf-8")
            written.append(target)
        return written


__all__ = [
    "GRAPH_PAGE",
    "MarkdownRenderer",
    "RenderedPage",
    "create_environment",
    "documentation_summary",
    "mermaid_id",
    "modifier_keywords",
]
