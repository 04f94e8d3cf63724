"""Logging for qpkit.

Every module asks :func:`get_logger` for its logger, which places it under
the ``qpkit`` namespace with its own stderr handler and no propagation to
the root logger. Solvers report iteration decisions at DEBUG and an
exhausted iteration budget at WARNING, so the default level keeps them
quiet unless something went wrong.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_ROOT = "qpkit"

_level = logging.WARNING
_format = "[%(levelname)s] %(name)s: %(message)s"
_stream: Optional[IO[str]] = None

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _make_handler() -> logging.Handler:
    handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
    handler.setLevel(_level)
    handler.setFormatter(logging.Formatter(_format))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached ``qpkit`` logger for ``name``.

    ``name`` is normally the caller's ``__name__``; names outside the
    package are prefixed with ``qpkit.``. Without a name the package logger
    itself is returned.

    Example:
        >>> from qpkit.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("Including constraint %d", 3)
    """
    if name is None:
        name = _ROOT
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"

    logger = _loggers.get(name)
    if logger is None:
        logger = logging.getLogger(name)
        if not logger.handlers:
            logger.setLevel(_level)
            logger.addHandler(_make_handler())
            logger.propagate = False
        _loggers[name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every qpkit logger and handler.

    ``level`` is a ``logging`` constant or its name, e.g. ``"DEBUG"``.
    """
    global _level
    _level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Reset level, format and output stream for all qpkit loggers.

    Existing loggers get a fresh handler; loggers created afterwards use
    the same settings. ``None`` restores the default format or ``sys.stderr``.
    """
    global _level, _format, _stream
    _level = _coerce_level(level)
    _format = format_string if format_string is not None else "[%(levelname)s] %(name)s: %(message)s"
    _stream = stream

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler())


__all__ = ["get_logger", "set_log_level", "configure_logging"]
