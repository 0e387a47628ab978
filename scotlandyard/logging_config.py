"""Unified logging configuration for the Scotland Yard engine.

Engine modules only ever call ``logging.getLogger(__name__)``; hosts (the
self-play runner, tests, embedding applications) decide where records go by
calling :func:`setup_logging` once.

Usage:
    from scotlandyard.logging_config import setup_logging, LogContext

    logger = setup_logging("scotlandyard", level="DEBUG")
    with LogContext(logger, logging.WARNING):
        run_quietly()
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable

from . import config

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
COMPACT_FORMAT = "%(levelname)s %(name)s: %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(message)s"
)
STRUCTURED_FORMAT = (
    '{"time": "%(asctime)s", "logger": "%(name)s", '
    '"level": "%(levelname)s", "message": "%(message)s"}'
)

_FORMATS = {
    "default": DEFAULT_FORMAT,
    "compact": COMPACT_FORMAT,
    "detailed": DETAILED_FORMAT,
    "structured": STRUCTURED_FORMAT,
}

# Packages that are chatty at INFO and rarely useful to engine users.
NOISY_PACKAGES = ("urllib3", "asyncio", "prometheus_client", "yaml")


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return logging.getLevelName(level.upper())
    return level


def setup_logging(
    name: str = "scotlandyard",
    level: int | str | None = None,
    log_file: str | Path | None = None,
    log_dir: str | Path | None = None,
    console: bool = True,
    format_style: str | None = None,
    propagate: bool = False,
) -> logging.Logger:
    """Configure and return the logger ``name``.

    Args:
        name: Logger name, usually the top-level package.
        level: Level as int or name; defaults to ``SCOTLANDYARD_LOG_LEVEL``.
        log_file: Optional file to append records to.
        log_dir: Optional directory; a ``<name>.log`` file is created in it.
        console: Attach a stderr stream handler.
        format_style: One of ``default``, ``compact``, ``detailed``,
            ``structured``. Unknown styles fall back to ``default``.
        propagate: Whether records also bubble up to the root logger.

    Calling this twice for the same name does not duplicate handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level if level is not None else config.LOG_LEVEL))
    logger.propagate = propagate

    style = format_style if format_style is not None else config.LOG_FORMAT
    formatter = logging.Formatter(_FORMATS.get(style, DEFAULT_FORMAT))

    if console and not any(
        type(h) is logging.StreamHandler for h in logger.handlers
    ):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_file is None and log_dir is not None:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / f"{name}.log"

    if log_file is not None:
        path = Path(log_file).resolve()
        already = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename) == path
            for h in logger.handlers
        )
        if not already:
            file_handler = logging.FileHandler(path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger ``name`` without touching its configuration."""
    return logging.getLogger(name)


def configure_third_party_loggers(
    quiet: bool = True,
    verbose_packages: Iterable[str] | None = None,
) -> None:
    """Raise noisy third-party loggers to WARNING unless listed as verbose."""
    if not quiet:
        return
    keep = set(verbose_packages or ())
    for package in NOISY_PACKAGES:
        if package not in keep:
            logging.getLogger(package).setLevel(logging.WARNING)


class LogContext:
    """Temporarily change a logger's level inside a ``with`` block."""

    def __init__(self, logger: logging.Logger, level: int | str):
        self.logger = logger
        self.level = _resolve_level(level)
        self._previous = logger.level

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc, tb) -> None:
        self.logger.setLevel(self._previous)
