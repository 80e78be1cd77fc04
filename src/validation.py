"""Argument checks run before any task mutation.

Every failure is a CommandError carrying the command name (used in the
"Error: <command>: <message>" line) and the process exit code.
"""
import re
from typing import Optional

from models import STATUSES
from task_list import TaskList

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_MISSING_PARAMETER = 2
EXIT_INVALID_FORMAT = 3
EXIT_NOT_FOUND = 4
EXIT_STORAGE = 5

# plain decimal numbers, optional sign, fraction and exponent; no underscores or hex
NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class CommandError(Exception):
    exit_code = EXIT_USAGE

    def __init__(self, command: str, message: str):
        super().__init__(message)
        self.command = command
        self.message = message


class MissingParameter(CommandError):
    exit_code = EXIT_MISSING_PARAMETER


class InvalidFormat(CommandError):
    exit_code = EXIT_INVALID_FORMAT


class NotFound(CommandError):
    exit_code = EXIT_NOT_FOUND


class UnknownCommand(CommandError):
    exit_code = EXIT_USAGE

    def __init__(self, token: str):
        super().__init__(token, f"Unknown argument: {token}")


def require_id(command: str, raw: Optional[str], tasks: TaskList) -> int:
    if not raw:
        raise MissingParameter(command, "Task id was not provided")
    text = raw.strip()
    if not NUMBER_RE.fullmatch(text):
        raise InvalidFormat(command, "Task id must be a number")
    value = float(text)
    # numeric but not a whole number (or out of range) can never match a task id
    if not value.is_integer() or not tasks.exists(int(value)):
        raise NotFound(command, "Task does not exist")
    return int(value)


def require_status(command: str, raw: Optional[str]) -> str:
    if raw not in STATUSES:
        raise InvalidFormat(
            command,
            f"Task status format is incorrect, possible values are: {', '.join(STATUSES)}",
        )
    return raw


def require_description(command: str, raw: Optional[str]) -> str:
    if not raw:
        raise MissingParameter(command, "Task description was not provided")
    return raw
