"""Main entry point for the task tracker.

Usage: task-tracker <command> [params]  (see `task-tracker help`).
"""
import locale
import logging
import sys
from typing import Optional, Sequence

import click

from cli import CLI
from config import get_settings
from logging_setup import setup_logging
from storage import Storage, StorageError
from validation import EXIT_STORAGE

logger = logging.getLogger(__name__)

PROG_NAME = "task-tracker"


def _use_user_locale() -> None:
    """Let %x / %X timestamps follow the user's LC_TIME; stay on C if it is unavailable."""
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error:
        logger.debug("LC_TIME locale unavailable; timestamps use the C locale")


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    _use_user_locale()
    args = sys.argv[1:] if argv is None else list(argv)
    storage = Storage(settings.tasks_file)
    cli = CLI(storage, settings)
    try:
        code = cli.run(args)
    except StorageError as exc:
        logger.error("Cannot use task file: %s", exc)
        click.echo(f"Error: {args[0] if args else PROG_NAME}: {exc}", err=True)
        code = EXIT_STORAGE
    sys.exit(code)

if __name__ == "__main__":
    main()
