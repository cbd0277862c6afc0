"""Source file discovery for C# projects.

Besides ``.gitignore`` and the configured ``exclude_paths``, every
``*.csproj`` met during the walk contributes its ``<Compile Remove="...">``
items as exclusions scoped to the project directory. Build output folders
(``bin``, ``obj`` and friends) are pruned by name, case-insensitively.
"""

from __future__ import annotations

import os
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from .logging import get_logger

DEFAULT_EXCLUDE_DIRS = (
    "bin",
    "obj",
    "packages",
    "TestResults",
    "node_modules",
    ".vs",
    ".vscode",
    ".idea",
    ".git",
    ".hg",
    ".svn",
)

_SOURCE_SUFFIXES = {".cs"}
_PROJECT_SUFFIX = ".csproj"

logger = get_logger("scanner")


@dataclass(frozen=True)
class ExcludeRule:
    """A path pattern, relative to ``base``, that removes files from a scan.

    Patterns use forward slashes; ``**/`` also matches zero directories.
    Unanchored patterns without a slash match the last path component only.
    """

    pattern: str
    base: str = ""
    directory_only: bool = False
    anchored: bool = False
    negate: bool = False

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.base:
            if not rel_path.startswith(f"{self.base}/"):
                return False
            rel_path = rel_path[len(self.base) + 1 :]
        if not self.anchored and "/" not in self.pattern:
            return fnmatchcase(rel_path.rsplit("/", 1)[-1], self.pattern)
        if fnmatchcase(rel_path, self.pattern):
            return True
        return "**/" in self.pattern and fnmatchcase(rel_path, self.pattern.replace("**/", ""))


def exclude_rule(pattern: str, base: str = "", negate: bool = False) -> Optional[ExcludeRule]:
    """Normalise an MSBuild or gitignore style pattern into an :class:`ExcludeRule`."""
    pattern = pattern.strip().replace("\\", "/")
    directory_only = pattern.endswith("/")
    pattern = pattern.rstrip("/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    anchored = pattern.startswith("/")
    pattern = pattern.lstrip("/")
    if not pattern:
        return None
    return ExcludeRule(
        pattern=pattern,
        base=base,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
    )


def project_exclusions(project_file: Path, base: str = "") -> List[ExcludeRule]:
    """Return the ``<Compile Remove>`` items of an SDK-style project file."""
    try:
        root = ET.fromstring(project_file.read_text(encoding="utf-8-sig"))
    except (ET.ParseError, OSError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring unreadable project file %s: %s", project_file, exc)
        return []

    namespace = _detect_xml_namespace(root)
    tag = f"{{{namespace}}}Compile" if namespace else "Compile"
    rules: List[ExcludeRule] = []
    for element in root.findall(f".//{tag}"):
        for item in (element.get("Remove") or "").split(";"):
            rule = exclude_rule(item, base=base)
            if rule is not None:
                rules.append(rule)
    logger.debug("%s removes %d compile items", project_file.name, len(rules))
    return rules


def _detect_xml_namespace(element: ET.Element) -> str | None:
    match = re.match(r"\{(.+)}", element.tag)
    return match.group(1) if match else None


def _parse_gitignore(path: Path) -> List[ExcludeRule]:
    if not path.exists():
        return []

    rules: List[ExcludeRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        rule = exclude_rule(line[1:] if negate else line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[ExcludeRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def _iter_files(root: Path, rules: List[ExcludeRule], excluded_dirs: Iterable[str]) -> Iterator[Path]:
    pruned = {name.lower() for name in excluded_dirs}
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        for filename in sorted(filenames):
            if filename.lower().endswith(_PROJECT_SUFFIX):
                rules.extend(project_exclusions(current_dir / filename, base=rel_dir))

        kept = []
        for name in dirnames:
            if name.lower() in pruned:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _should_ignore(rel_path, True, rules):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in filenames:
            if Path(filename).suffix.lower() not in _SOURCE_SUFFIXES:
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


class SourceScanner:
    """Walks a project directory and lists the C# compilation units in it."""

    def scan(
        self,
        root: Path | str,
        exclude_paths: Iterable[str] = (),
        exclude_dirs: Optional[Iterable[str]] = None,
    ) -> List[Path]:
        """Return source files below ``root`` sorted by relative path."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if root_path.is_file():
            return [root_path] if root_path.suffix.lower() in _SOURCE_SUFFIXES else []

        rules = _parse_gitignore(root_path / ".gitignore")
        for pattern in exclude_paths:
            rule = exclude_rule(pattern)
            if rule is not None:
                rules.append(rule)

        excluded_dirs = DEFAULT_EXCLUDE_DIRS if exclude_dirs is None else tuple(exclude_dirs)
        return sorted(
            _iter_files(root_path, rules, excluded_dirs),
            key=lambda path: path.relative_to(root_path).as_posix(),
        )


__all__ = ["DEFAULT_EXCLUDE_DIRS", "ExcludeRule", "SourceScanner", "exclude_rule", "project_exclusions"]
