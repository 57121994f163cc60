"""Logging utilities for numlab.

Solvers log per-iteration detail at DEBUG, convergence at INFO and advisory
conditions (non-dominant matrices, exhausted budgets) at WARNING. The level
starts from ``NUMLAB_LOG_LEVEL`` (a name such as ``INFO`` or a number) and
falls back to WARNING.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Optional

_LEVEL_ENV_VAR = "NUMLAB_LOG_LEVEL"
_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _coerce_level(level: int | str | None) -> int:
    if level is None or level == "":
        return logging.WARNING
    if isinstance(level, str):
        if level.isdigit():
            return int(level)
        return getattr(logging, level.upper(), logging.WARNING)
    return int(level)


# Settings applied to every logger handed out, including ones created later
_settings: dict = {
    "level": _coerce_level(os.getenv(_LEVEL_ENV_VAR)),
    "stream": None,
    "format": _FORMAT,
}

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def _install_handler(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(_settings["stream"] or sys.stderr)
    handler.setLevel(_settings["level"])
    handler.setFormatter(logging.Formatter(_settings["format"]))
    logger.addHandler(handler)
    logger.setLevel(_settings["level"])


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached to avoid duplicate handlers, and names outside the
    package are prefixed with ``numlab.``.

    Args:
        name: Logger name (typically `__name__`). If None, returns the
            package logger.

    Example:
        >>> from numlab.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Pivoting on row 2")
    """
    if name is None:
        name = "numlab"
    if name != "numlab" and not name.startswith("numlab."):
        name = f"numlab.{name}"

    if name not in _loggers:
        logger = logging.getLogger(name)
        if not logger.handlers:
            _install_handler(logger)
            logger.propagate = False
        _loggers[name] = logger
    return _loggers[name]


def set_log_level(level: int | str) -> None:
    """Set the level of every numlab logger, current and future.

    ``level`` is a ``logging`` constant or its name (``"DEBUG"``, ``"INFO"``...).
    """
    _settings["level"] = _coerce_level(level)
    for logger in _loggers.values():
        logger.setLevel(_settings["level"])
        for handler in logger.handlers:
            handler.setLevel(_settings["level"])


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Route every numlab logger to ``stream`` with ``format_string``.

    Each cached logger gets a single fresh handler; loggers created afterwards
    use the same level, format and stream.

    Example:
        >>> import io, logging
        >>> from numlab.logging import configure_logging
        >>> configure_logging(level=logging.DEBUG, stream=io.StringIO())
    """
    _settings.update(
        level=_coerce_level(level),
        stream=stream,
        format=format_string or _FORMAT,
    )
    for logger in _loggers.values():
        _install_handler(logger)


__all__ = ["configure_logging", "get_logger", "set_log_level"]
