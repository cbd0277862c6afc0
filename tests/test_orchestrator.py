"""Tests for codedocr.orchestrator."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

import pytest

from codedocr.analysis import AnalysisError
from codedocr.models import NamespaceDefinition, ReferenceEdge, ReferenceGraph
from codedocr.orchestrator import Orchestrator, edge_lines
from codedocr.syntax import CompilationUnit, IdentifierName, SyntaxProviderError

from tests._fixtures.nodes import doc, klass, prop, unit
from tests._fixtures.repo_builder import RepoBuilder


class FakeProvider:
    """Returns prepared compilation units keyed by file name."""

    def __init__(self, units: Dict[str, CompilationUnit]) -> None:
        self.units = units
        self.parsed: list[str] = []

    def parse(self, source: str, path: Optional[str] = None) -> CompilationUnit:
        raise NotImplementedError

    def parse_file(self, path: Path) -> CompilationUnit:
        self.parsed.append(path.name)
        try:
            prepared = self.units[path.name]
        except KeyError as exc:
            raise SyntaxProviderError(f"Cannot parse {path}") from exc
        return CompilationUnit(
            path=str(path),
            usings=prepared.usings,
            namespaces=prepared.namespaces,
            classes=prepared.classes,
        )


def _units() -> Dict[str, CompilationUnit]:
    foo = klass(
        "Foo",
        namespace="Shop",
        members=[prop("Id", "int", trivia=[doc("/// first\n/// second")])],
    )
    bar = klass(
        "Bar",
        namespace="Shop",
        members=[prop("Ref", "Foo", ("private",))],
        identifiers=[IdentifierName("Foo", "Shop.Bar", is_type=True)],
    )
    return {
        "Models.cs": unit(foo, bar, usings=["System"], namespaces=["Shop"]),
        "Empty.cs": unit(namespaces=["Shop.Empty"]),
    }


def _seed(repo_builder: RepoBuilder, *names: str) -> Path:
    repo_builder.write({name: "// placeholder\n" for name in names})
    return repo_builder.path()


def test_analyze_preserves_source_file_order(repo_builder: RepoBuilder) -> None:
    root = _seed(repo_builder, "Models.cs", "Empty.cs")
    orchestrator = Orchestrator(provider=FakeProvider(_units()))

    namespaces = orchestrator.analyze(root, workers=2)

    assert [namespace.name for namespace in namespaces] == ["Shop.Empty", "Shop"]
    models = namespaces[1]
    assert [definition.name for definition in models.classes] == ["Foo", "Bar"]
    assert models.graph.edges == (ReferenceEdge("Shop.Bar", "Shop.Foo"),)


def test_run_writes_pages_and_model(repo_builder: RepoBuilder, tmp_path: Path) -> None:
    root = _seed(repo_builder, "Models.cs", "Broken.cs")
    out_dir = tmp_path / "pages"
    json_path = tmp_path / "model.json"
    orchestrator = Orchestrator(provider=FakeProvider(_units()))

    report = orchestrator.run(root, output_dir=out_dir, json_path=json_path)

    assert report.class_count == 2
    assert [path.name for path in report.pages] == ["0_Foo.md", "1_Bar.md", "references.md"]
    assert (out_dir / "1_Bar.md").exists()
    assert [failure.path.name for failure in report.failures] == ["Broken.cs"]
    assert "Cannot parse" in report.failures[0].error
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["namespaces"][0]["name"] == "Shop"
    assert report.json_path == json_path


def test_run_uses_config_defaults(repo_builder: RepoBuilder) -> None:
    root = _seed(repo_builder, "Models.cs")
    repo_builder.write(
        {
            ".codedocr.yml": """
            output_dir: generated
            documentation:
              separator: " | "
            analysis:
              reference_graph: false
            """
        }
    )
    orchestrator = Orchestrator(provider=FakeProvider(_units()))

    report = orchestrator.run(root)

    assert report.pages[0].parent == root.resolve() / "generated"
    foo = report.namespaces[0].classes[0]
    assert foo.properties[0].documentation.comment == "first | second"
    assert report.namespaces[0].graph.edges == ()


def test_run_fails_when_every_unit_fails(repo_builder: RepoBuilder, tmp_path: Path) -> None:
    root = _seed(repo_builder, "Broken.cs", "AlsoBroken.cs")
    orchestrator = Orchestrator(provider=FakeProvider({}))

    with pytest.raises(AnalysisError):
        orchestrator.run(root, output_dir=tmp_path / "out")


def test_run_missing_root_raises(tmp_path: Path) -> None:
    orchestrator = Orchestrator(provider=FakeProvider({}))

    with pytest.raises(FileNotFoundError):
        orchestrator.run(tmp_path / "missing")


def test_custom_semantic_model_factory_is_used(repo_builder: RepoBuilder) -> None:
    root = _seed(repo_builder, "Models.cs")
    seen: list[str] = []

    def factory(compilation_unit: CompilationUnit):
        from codedocr.semantics import UnitSemanticModel

        seen.append(Path(compilation_unit.path or "").name)
        return UnitSemanticModel.from_unit(compilation_unit)

    Orchestrator(provider=FakeProvider(_units()), semantic_model_factory=factory).analyze(root)

    assert seen == ["Models.cs"]


def test_edge_lines_groups_by_unit() -> None:
    namespaces = [
        NamespaceDefinition(name="A", path="A.cs", graph=ReferenceGraph((ReferenceEdge("X", "Y"),))),
        NamespaceDefinition(name="B", path="B.cs"),
    ]

    assert edge_lines(namespaces) == ["A.cs:", "  X -> Y"]


def test_describe_lists_classes_of_every_unit(repo_builder: RepoBuilder) -> None:
    root = _seed(repo_builder, "Models.cs", "Empty.cs")
    orchestrator = Orchestrator(provider=FakeProvider(_units()))

    descriptions = orchestrator.describe(root)

    assert [text.splitlines()[0] for text in descriptions] == ["# `Shop`.Foo", "# `Shop`.Bar"]
    assert "**Id** is a `public` property of type `int`" in descriptions[0]
