"""Utilities to configure consistent logging across the pipeline.

The level can be given as a number or a name (``"debug"``, ``"INFO"``), so the
CLI can take it from ``--log-level`` or the ``LOG_LEVEL`` environment variable.
The pymongo driver logs every command and connection event at DEBUG; it is
held at WARNING unless the pipeline itself runs at DEBUG.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DRIVER_LOGGERS = ("pymongo",)


def resolve_level(level: int | str | None = None) -> int:
    """Return a numeric logging level.

    Args:
        level: Numeric level, level name, or ``None`` to read ``LOG_LEVEL``
            (defaulting to INFO).

    Raises:
        ValueError: if `level` names no known logging level.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level

    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def configure_logging(log_path: Path | None = None, level: int | str | None = None) -> None:
    """Configure root logging handlers and formatting.

    Args:
        log_path: Optional path to a file where logs will be written.
        level: Logging level as number or name (defaults to ``LOG_LEVEL``
            or INFO).
    """
    numeric = resolve_level(level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    driver_level = logging.DEBUG if numeric <= logging.DEBUG else logging.WARNING
    for name in DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(driver_level)
