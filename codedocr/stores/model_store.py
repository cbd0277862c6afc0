"""JSON persistence for the declaration model."""

from __future__ import annotations

from dataclasses import asdict
from datetime import UTC, datetime
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..models import (
    AttributeDefinition,
    ClassDefinition,
    ClassPropertyDefinition,
    DocumentationDefinition,
    MethodDefinition,
    NamespaceDefinition,
    PropertyDefinition,
    ReferenceEdge,
    ReferenceGraph,
    UsingDefinition,
)

_STORE_VERSION = 1


class ModelStoreError(RuntimeError):
    """Raised when a stored model cannot be read back."""


class ModelStore:
    """Writes and reads namespace definitions as versioned JSON."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def write(self, namespaces: Sequence[NamespaceDefinition]) -> Path:
        payload = {
            "version": _STORE_VERSION,
            "generated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "namespaces": [asdict(namespace) for namespace in namespaces],
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return self._path

    def read(self) -> List[NamespaceDefinition]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ModelStoreError(f"Cannot read model from {self._path}: {exc}") from exc
        if not isinstance(data, dict) or data.get("version") != _STORE_VERSION:
            raise ModelStoreError(f"Unsupported model store version in {self._path}")
        namespaces = data.get("namespaces")
        if not isinstance(namespaces, list):
            raise ModelStoreError(f"Malformed model store {self._path}")
        return [_namespace_from_dict(item) for item in namespaces]


# ----------------------------------------------------------------------
# Internal helpers


def _namespace_from_dict(payload: Dict[str, Any]) -> NamespaceDefinition:
    graph = payload.get("graph") or {}
    return NamespaceDefinition(
        name=payload.get("name"),
        classes=tuple(_class_from_dict(item) for item in payload.get("classes", [])),
        path=payload.get("path"),
        graph=ReferenceGraph(
            edges=tuple(ReferenceEdge(**edge) for edge in graph.get("edges", []))
        ),
    )


def _class_from_dict(payload: Dict[str, Any]) -> ClassDefinition:
    return ClassDefinition(
        name=payload["name"],
        usings=tuple(UsingDefinition(**item) for item in payload.get("usings", [])),
        properties=tuple(_class_property_from_dict(item) for item in payload.get("properties", [])),
        methods=tuple(_method_from_dict(item) for item in payload.get("methods", [])),
        qualified_name=payload.get("qualified_name", ""),
        namespace=payload.get("namespace"),
        attributes=_attributes_from_list(payload.get("attributes", [])),
        documentation=_documentation_from_dict(payload.get("documentation")),
        references=tuple(payload.get("references", [])),
    )


def _class_property_from_dict(payload: Dict[str, Any]) -> ClassPropertyDefinition:
    values = dict(payload)
    values["attributes"] = _attributes_from_list(values.get("attributes", []))
    values["documentation"] = _documentation_from_dict(values.get("documentation"))
    return ClassPropertyDefinition(**values)


def _method_from_dict(payload: Dict[str, Any]) -> MethodDefinition:
    values = dict(payload)
    values["attributes"] = _attributes_from_list(values.get("attributes", []))
    values["parameters"] = tuple(_property_from_dict(item) for item in values.get("parameters", []))
    values["documentation"] = _documentation_from_dict(values.get("documentation"))
    return MethodDefinition(**values)


def _property_from_dict(payload: Dict[str, Any]) -> PropertyDefinition:
    return PropertyDefinition(
        attributes=_attributes_from_list(payload.get("attributes", [])),
        name=payload["name"],
        type=payload["type"],
    )


def _attributes_from_list(items: List[Dict[str, Any]]) -> tuple:
    return tuple(
        AttributeDefinition(
            name=item["name"],
            arguments=tuple(_property_from_dict(argument) for argument in item.get("arguments", [])),
        )
        for item in items
    )


def _documentation_from_dict(payload: Optional[Dict[str, Any]]) -> DocumentationDefinition:
    if not isinstance(payload, dict):
        return DocumentationDefinition()
    return DocumentationDefinition(comment=str(payload.get("comment", "")))


__all__ = ["ModelStore", "ModelStoreError"]
