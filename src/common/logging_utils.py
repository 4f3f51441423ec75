"""Centralized logging helpers.

All entry points call ``configure_logging`` once; modules obtain loggers via
``logging.getLogger(__name__)`` and attach structured context to debug
records with ``extra_context``.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_NAME = "intern-cli"


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stderr`` is at emit time."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def configure_logging(level: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """Install the console handler on the root logger and set its level.

    Precedence: ``verbose`` (DEBUG) > ``level`` > ``INTERN_CLI_LOG_LEVEL`` >
    ``Constants.LOG_LEVEL``. Safe to call more than once.
    """
    root = logging.getLogger()
    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        handler = _StderrHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)

    if verbose:
        level_value = logging.DEBUG
    else:
        level_name = str(level or os.environ.get(Constants.ENV_LOG_LEVEL) or Constants.LOG_LEVEL).upper()
        level_value = getattr(logging, level_name, None)
        if not isinstance(level_value, int):
            level_value = getattr(logging, Constants.LOG_LEVEL)
    root.setLevel(level_value)
    return root


def get_verbose_logger(verbose: bool = False) -> logging.Logger:
    """Return the front-end logger handed to adapters as ``vlog``."""
    vlog = logging.getLogger("intern_cli.verbose")
    vlog.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return vlog


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when debug records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log record.

    ``None`` values are dropped so records only carry populated fields.
    """
    return {k: v for k, v in fields.items() if v is not None}


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
