"""Logging setup for codedocr runs.

Every logger lives under the ``codedocr`` hierarchy. Records about one
source file go through :func:`unit_logger`, which prefixes them with the
file's path so output from parallel workers can be told apart.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping, Tuple

_ROOT_LOGGER = "codedocr"
_CONSOLE_FORMAT = "[codedocr] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(threadName)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger such as ``codedocr.syntax``."""
    full_name = f"{_ROOT_LOGGER}.{name}" if name else _ROOT_LOGGER
    return logging.getLogger(full_name)


class UnitLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with the compilation unit it concerns."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"{self.extra['unit']}: {msg}", kwargs  # type: ignore[index]


def unit_logger(name: str, path: Path | str) -> UnitLoggerAdapter:
    return UnitLoggerAdapter(get_logger(name), {"unit": str(path)})


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send codedocr records to stderr and, when given, to ``log_file``.

    ``verbose`` wins over ``quiet``. The log file always receives DEBUG
    records, whatever the console level.
    """
    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.WARNING
    else:
        console_level = logging.INFO

    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    # the CLI may run more than once per process
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["UnitLoggerAdapter", "configure_logging", "get_logger", "unit_logger"]
