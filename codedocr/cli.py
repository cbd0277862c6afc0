"""CLI entrypoints for codedocr commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .analysis import AnalysisError
from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator, edge_lines
from .syntax import SyntaxProviderError

_HANDLED_ERRORS = (FileNotFoundError, ConfigError, AnalysisError, SyntaxProviderError)


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_logging_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors on the console.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a debug log, including per-file progress, to this file.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to a C# project directory or source file (defaults to current directory).",
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codedocr",
        description="Build declaration models and class reference graphs for C# sources.",
    )
    _add_verbose_option(parser)
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Render markdown pages for every class of a C# project.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_path_argument(analyze_parser)
    analyze_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Directory receiving the rendered pages (overrides output_dir).",
    )
    analyze_parser.add_argument(
        "--json",
        type=Path,
        default=None,
        help="Also write the declaration model as JSON to this file.",
    )
    analyze_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of source files analyzed in parallel.",
    )

    graph_parser = subparsers.add_parser(
        "graph",
        help="Print the class reference edges of each compilation unit.",
    )
    _add_verbose_option(graph_parser, suppress_default=True)
    _add_path_argument(graph_parser)

    describe_parser = subparsers.add_parser(
        "describe",
        help="Print a plain-language description of every class and method.",
    )
    _add_verbose_option(describe_parser, suppress_default=True)
    _add_path_argument(describe_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for codedocr commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=args.quiet, log_file=args.log_file)

    orchestrator = Orchestrator()

    if args.command == "analyze":
        try:
            report = orchestrator.run(
                args.path,
                output_dir=args.out,
                json_path=args.json,
                workers=args.workers,
            )
        except _HANDLED_ERRORS as exc:
            parser.exit(1, f"codedocr analyze failed: {exc}\nRun with --verbose for more details.\n")
        for failure in report.failures:
            print(f"skipped {_relativize(failure.path)}: {failure.error}", file=sys.stderr)
        output_dir = report.pages[0].parent if report.pages else args.out
        print(
            f"Rendered {len(report.pages)} pages for {report.class_count} classes"
            + (f" in {_relativize(output_dir)}" if output_dir else "")
        )
        if report.json_path is not None:
            print(f"Model written to {_relativize(report.json_path)}")
    elif args.command == "graph":
        try:
            namespaces = orchestrator.analyze(args.path)
        except _HANDLED_ERRORS as exc:
            parser.exit(1, f"codedocr graph failed: {exc}\nRun with --verbose for more details.\n")
        lines = edge_lines(namespaces)
        if not lines:
            print("No class references found")
        for line in lines:
            print(line)
    elif args.command == "describe":
        try:
            descriptions = orchestrator.describe(args.path)
        except _HANDLED_ERRORS as exc:
            parser.exit(1, f"codedocr describe failed: {exc}\nRun with --verbose for more details.\n")
        if not descriptions:
            print("No classes found")
        for description in descriptions:
            print(description.rstrip("\n"))
            print()
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(Path(path).relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
