"""Diagnostic logging for the CLI.

User-facing output goes through click.echo; logging is only for
diagnostics on stderr and stays quiet (WARNING) unless
TASK_TRACKER_LOG_LEVEL asks for more.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union


def setup_logging(level: Union[int, str] = logging.WARNING, stream: Optional[TextIO] = None) -> None:
    """Install a single stderr handler on the root logger.

    Call this ONCE, very early (before the first logger call).
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
