"""Pipeline orchestration for the analyze and graph flows."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from .analysis import AnalysisError, DeclarationModelBuilder
from .config import CodeDocrConfig, load_config
from .logging import get_logger, unit_logger
from .models import NamespaceDefinition
from .rendering import MarkdownRenderer, SourceDescriber
from .scanner import SourceScanner
from .semantics import SemanticModel, UnitSemanticModel
from .stores import ModelStore
from .syntax import CompilationUnit, SyntaxProviderError, SyntaxTreeProvider, TreeSitterSyntaxProvider

SemanticModelFactory = Callable[[CompilationUnit], SemanticModel]


@dataclass
class UnitFailure:
    """A source file that could not be analyzed."""

    path: Path
    error: str


@dataclass
class AnalysisReport:
    """Result of an analyze run."""

    root: Path
    namespaces: List[NamespaceDefinition] = field(default_factory=list)
    pages: List[Path] = field(default_factory=list)
    failures: List[UnitFailure] = field(default_factory=list)
    json_path: Optional[Path] = None

    @property
    def class_count(self) -> int:
        return sum(len(namespace.classes) for namespace in self.namespaces)


class Orchestrator:
    """Coordinates scanning, parsing, model building and rendering."""

    def __init__(
        self,
        scanner: SourceScanner | None = None,
        provider: SyntaxTreeProvider | None = None,
        renderer: MarkdownRenderer | None = None,
        semantic_model_factory: SemanticModelFactory | None = None,
    ) -> None:
        self.scanner = scanner or SourceScanner()
        self._provider = provider
        self._renderer = renderer
        self.semantic_model_factory = semantic_model_factory or UnitSemanticModel.from_unit
        self.logger = get_logger("orchestrator")

    @property
    def provider(self) -> SyntaxTreeProvider:
        if self._provider is None:
            self._provider = TreeSitterSyntaxProvider()
        return self._provider

    def analyze_unit(
        self, path: Path, *, config: CodeDocrConfig | None = None
    ) -> NamespaceDefinition:
        """Parse a single source file and build its namespace definition."""
        unit = self.provider.parse_file(Path(path))
        semantic_model = self.semantic_model_factory(unit)
        builder = DeclarationModelBuilder(
            semantic_model,
            documentation_separator=config.documentation.separator if config else "\n",
            include_references=config.analysis.reference_graph if config else True,
        )
        return builder.build_namespace(unit)

    def analyze(
        self,
        root: Path | str,
        workers: int | None = None,
        *,
        config: CodeDocrConfig | None = None,
    ) -> List[NamespaceDefinition]:
        """Analyze every source file below ``root``, preserving source-file order."""
        namespaces, _ = self._analyze(Path(root), workers, config)
        return namespaces

    def run(
        self,
        root: Path | str,
        output_dir: Path | None = None,
        json_path: Path | None = None,
        workers: int | None = None,
    ) -> AnalysisReport:
        """Analyze ``root``, render markdown pages and optionally dump the model."""
        root_path = Path(root).expanduser().resolve()
        self.logger.info("Starting analyze run for %s", root_path)
        config = load_config(root_path if root_path.is_dir() else root_path.parent)

        namespaces, failures = self._analyze(root_path, workers, config)
        if failures and not namespaces:
            raise AnalysisError(
                f"All {len(failures)} source files failed to analyze; first error: {failures[0].error}"
            )

        renderer = self._resolve_renderer(config)
        target_dir = output_dir or config.output_dir
        pages = renderer.write_pages(renderer.render_pages(namespaces), target_dir)
        self.logger.info("Wrote %d pages to %s", len(pages), target_dir)

        dump_path = json_path or config.json_dump
        if dump_path is not None:
            ModelStore(dump_path).write(namespaces)
            self.logger.info("Model written to %s", dump_path)

        return AnalysisReport(
            root=root_path,
            namespaces=namespaces,
            pages=pages,
            failures=failures,
            json_path=dump_path,
        )

    def describe(self, root: Path | str, workers: int | None = None) -> List[str]:
        """Return a description of every class and method below ``root``."""
        root_path = Path(root).expanduser().resolve()
        config = load_config(root_path if root_path.is_dir() else root_path.parent)
        namespaces, _ = self._analyze(root_path, workers, config)
        return list(SourceDescriber(config.templates_dir).describe_source(namespaces))

    # ------------------------------------------------------------------
    # Internal helpers

    def _analyze(
        self,
        root: Path,
        workers: int | None,
        config: CodeDocrConfig | None,
    ) -> Tuple[List[NamespaceDefinition], List[UnitFailure]]:
        if config is None:
            config = load_config(root if root.is_dir() else root.parent)
        files = self.scanner.scan(root, config.exclude_paths, config.exclude_dirs)
        self.logger.debug("Scanner discovered %d source files", len(files))

        worker_count = max(1, workers or config.analysis.workers)
        if worker_count == 1 or len(files) < 2:
            results = [self._analyze_one(path, config) for path in files]
        else:
            with ThreadPoolExecutor(max_workers=worker_count) as executor:
                results = list(executor.map(lambda path: self._analyze_one(path, config), files))

        namespaces: List[NamespaceDefinition] = []
        failures: List[UnitFailure] = []
        for path, namespace, error in results:
            if namespace is not None:
                namespaces.append(namespace)
            else:
                failures.append(UnitFailure(path=path, error=error or "unknown error"))
        return namespaces, failures

    def _analyze_one(
        self, path: Path, config: CodeDocrConfig
    ) -> Tuple[Path, Optional[NamespaceDefinition], Optional[str]]:
        log = unit_logger("orchestrator", path)
        try:
            namespace = self.analyze_unit(path, config=config)
        except (SyntaxProviderError, AnalysisError) as exc:
            log.warning("skipped: %s", exc)
            return path, None, str(exc)
        log.debug(
            "analyzed %d classes, %d reference edges", len(namespace.classes), len(namespace.graph.edges)
        )
        return path, namespace, None

    def _resolve_renderer(self, config: CodeDocrConfig) -> MarkdownRenderer:
        if self._renderer is not None:
            return self._renderer
        return MarkdownRenderer(config.templates_dir)


def edge_lines(namespaces: Sequence[NamespaceDefinition]) -> List[str]:
    """Return ``A -> B`` lines for every reference edge, grouped by unit."""
    lines: List[str] = []
    for namespace in namespaces:
        if not namespace.graph.edges:
            continue
        lines.append(f"{namespace.path or namespace.name or '<unit>'}:")
        lines.extend(f"  {edge.source} -> {edge.target}" for edge in namespace.graph.edges)
    return lines


__all__ = ["AnalysisReport", "Orchestrator", "UnitFailure", "edge_lines"]
