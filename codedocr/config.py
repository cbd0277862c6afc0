"""Configuration loading for codedocr (.codedocr.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .scanner import DEFAULT_EXCLUDE_DIRS

CONFIG_FILENAME = ".codedocr.yml"
DEFAULT_OUTPUT_DIR = "docs/out"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AnalysisConfig:
    """Analysis pass settings."""

    workers: int = 1
    reference_graph: bool = True


@dataclass
class DocumentationConfig:
    """Documentation comment normalisation settings."""

    separator: str = "\n"


@dataclass
class CodeDocrConfig:
    """Represents the settings defined in .codedocr.yml."""

    root: Path
    output_dir: Path
    templates_dir: Optional[Path] = None
    exclude_paths: List[str] = field(default_factory=list)
    exclude_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    documentation: DocumentationConfig = field(default_factory=DocumentationConfig)
    json_dump: Optional[Path] = None


def load_config(config_path: Path) -> CodeDocrConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CodeDocrConfig(root=root, output_dir=root / DEFAULT_OUTPUT_DIR)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_dir_str = _as_str(data.get("output_dir")) or DEFAULT_OUTPUT_DIR
    templates_dir_str = _as_str(data.get("templates_dir"))
    json_dump_str = _as_str(data.get("json_dump"))

    analysis = AnalysisConfig()
    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        workers = _as_int(analysis_data.get("workers"))
        if workers is not None:
            if workers < 1:
                raise ConfigError("analysis.workers must be at least 1")
            analysis.workers = workers
        reference_graph = _as_bool(analysis_data.get("reference_graph"))
        if reference_graph is not None:
            analysis.reference_graph = reference_graph

    exclude_dirs = list(DEFAULT_EXCLUDE_DIRS)
    if "exclude_dirs" in data:
        exclude_dirs = _as_str_list(data.get("exclude_dirs"))
        if any("/" in name or "\\" in name for name in exclude_dirs):
            raise ConfigError("exclude_dirs takes directory names, not paths")

    documentation = DocumentationConfig()
    documentation_data = _as_dict(data.get("documentation"))
    if documentation_data and "separator" in documentation_data:
        separator = documentation_data.get("separator")
        if not isinstance(separator, str) or not separator:
            raise ConfigError("documentation.separator must be a non-empty string")
        documentation.separator = separator

    return CodeDocrConfig(
        root=root,
        output_dir=root / output_dir_str,
        templates_dir=root / templates_dir_str if templates_dir_str else None,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        exclude_dirs=exclude_dirs,
        analysis=analysis,
        documentation=documentation,
        json_dump=root / json_dump_str if json_dump_str else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "AnalysisConfig",
    "CONFIG_FILENAME",
    "CodeDocrConfig",
    "ConfigError",
    "DocumentationConfig",
    "load_config",
]
