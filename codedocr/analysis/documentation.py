"""Documentation comment association and normalisation."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterable, Tuple

from ..logging import get_logger
from ..models import DocumentationDefinition
from ..syntax.nodes import Trivia

DEFAULT_SEPARATOR = "\n"

_LINE_MARKER = re.compile(r"^\s*///")
_BLOCK_LINE_MARKER = re.compile(r"^\s*\*(?!/)")
_WHITESPACE = re.compile(r"\s+")
_TAG = re.compile(r"<[^>]*>")

logger = get_logger("analysis.documentation")


@dataclass(frozen=True)
class DocumentationSummary:
    """The parts of an XML documentation comment used in descriptions."""

    summary: str = ""
    params: Tuple[Tuple[str, str], ...] = ()
    returns: str = ""

    def param(self, name: str) -> str:
        for param_name, text in self.params:
            if param_name == name:
                return text
        return ""


def normalize_documentation(text: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Strip comment markers, collapse whitespace and drop empty lines.

    Applying it to its own output returns the output unchanged.
    """
    if not text:
        return ""
    stripped = text.strip()
    if stripped.startswith("/**"):
        body = stripped[3:]
        if body.endswith("*/"):
            body = body[:-2]
        lines = [_BLOCK_LINE_MARKER.sub("", line, count=1) for line in body.splitlines()]
    else:
        lines = [_LINE_MARKER.sub("", line, count=1) for line in text.splitlines()]
    cleaned = (_WHITESPACE.sub(" ", line).strip() for line in lines)
    return separator.join(line for line in cleaned if line)


def associate_documentation(
    trivia: Iterable[Trivia], separator: str = DEFAULT_SEPARATOR
) -> DocumentationDefinition:
    """Return the first documentation block of a declaration's leading trivia."""
    for item in trivia:
        if item.is_documentation:
            return DocumentationDefinition(comment=normalize_documentation(item.text, separator))
    return DocumentationDefinition(comment="")


def parse_documentation(comment: str) -> DocumentationSummary:
    """Read the summary, parameters and return text of a normalised comment.

    Text outside any tag counts as the summary when there is no
    ``<summary>`` element. Comments that are not well-formed XML fall back to
    their text with the tags removed.
    """
    if not comment:
        return DocumentationSummary()
    try:
        root = ET.fromstring(f"<root>{comment}</root>")
    except ET.ParseError as exc:
        logger.debug("Documentation is not well-formed XML: %s", exc)
        return DocumentationSummary(summary=_collapse(_TAG.sub(" ", comment)))

    summary_element = root.find("summary")
    if summary_element is not None:
        summary = _collapse("".join(summary_element.itertext()))
    else:
        summary = _collapse((root.text or "") + "".join(child.tail or "" for child in root))
    params = tuple(
        (element.get("name", ""), _collapse("".join(element.itertext())))
        for element in root.iter("param")
    )
    returns_element = root.find("returns")
    returns = _collapse("".join(returns_element.itertext())) if returns_element is not None else ""
    return DocumentationSummary(summary=summary, params=params, returns=returns)


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


__all__ = [
    "DEFAULT_SEPARATOR",
    "DocumentationSummary",
    "associate_documentation",
    "normalize_documentation",
    "parse_documentation",
]
