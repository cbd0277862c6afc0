"""Plain-language descriptions of classes and their members."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Sequence

from ..analysis.documentation import parse_documentation
from ..logging import get_logger
from ..models import (
    ClassDefinition,
    ClassPropertyDefinition,
    MethodDefinition,
    NamespaceDefinition,
    PropertyDefinition,
)
from .renderer import create_environment


class SourceDescriber:
    """Writes one markdown description per class and per method.

    Sentences come from the macros of ``describe.md.j2`` and class pages
    from ``description.md.j2``; both can be overridden from
    ``templates_dir`` like the page templates.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = create_environment(templates_dir)
        self._sentences = self._env.get_template("describe.md.j2").module
        self.logger = get_logger("rendering.describer")

    def describe_property(self, prop: ClassPropertyDefinition) -> str:
        return str(self._sentences.property_sentence(prop)).strip()  # type: ignore[attr-defined]

    def describe_parameter(self, parameter: PropertyDefinition) -> str:
        return str(self._sentences.parameter_sentence(parameter)).strip()  # type: ignore[attr-defined]

    def describe_method(self, class_name: str, method: MethodDefinition) -> str:
        """Describe ``method`` followed by its documented summary, if any."""
        sentence = str(self._sentences.method_sentence(class_name, method)).strip()  # type: ignore[attr-defined]
        summary = parse_documentation(method.documentation.comment).summary
        return f"{sentence}\n\n{summary}" if summary else sentence

    def describe_class(self, definition: ClassDefinition) -> str:
        template = self._env.get_template("description.md.j2")
        return template.render(cls=definition).strip() + "\n"

    def describe_source(self, namespaces: Sequence[NamespaceDefinition]) -> Iterator[str]:
        """Yield each class description followed by the descriptions of its methods."""
        for namespace in namespaces:
            for definition in namespace.classes:
                yield self.describe_class(definition)
                for method in definition.methods:
                    yield self.describe_method(definition.name, method)
        self.logger.debug("Described %d units", len(namespaces))


__all__ = ["SourceDescriber"]
