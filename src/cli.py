"""Command-line dispatch for the task tracker.

One command per invocation: the first argument selects the command and up
to two following arguments are its parameters. Arguments are validated
before any mutation, and a mutating command saves the whole list once.
"""
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, TextIO

import click

from config import Settings
from models import DONE, IN_PROGRESS, STATUSES, TODO, Task
from storage import Storage
from task_list import EmptyStore, TaskList, TaskNotFound
from theme import Palette
from validation import (
    EXIT_OK,
    CommandError,
    NotFound,
    UnknownCommand,
    require_description,
    require_id,
    require_status,
)

logger = logging.getLogger(__name__)

MARK_COMMANDS: Dict[str, str] = {
    'mark-todo': TODO,
    'mark-in-progress': IN_PROGRESS,
    'mark-done': DONE,
}

# (name, params, description) rows for the usage text
USAGE_ROWS = [
    ('help', '', 'Lists the available commands'),
    ('list', '', 'Lists all tasks'),
    ('list', '?<status>', f'Lists only the tasks in that status. Possible status values are {", ".join(STATUSES)}'),
    ('add', '<task-description>', 'Adds a task'),
    ('update', '<task-id> <task-description>', 'Updates task description'),
    ('delete', '<task-id>', 'Deletes a task'),
    ('mark-todo', '<task-id>', 'Marks a task as todo'),
    ('mark-in-progress', '<task-id>', 'Marks a task as in-progress'),
    ('mark-done', '<task-id>', 'Marks a task as done'),
]
COLUMN_GAP = ' ' * 6
NO_UPDATE = '—'

Handler = Callable[[TaskList, str, Optional[str], Optional[str]], None]


class CLI:
    def __init__(
        self,
        storage: Storage,
        settings: Settings,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.storage = storage
        self.settings = settings
        self.out = out
        self.err = err
        self.clock = clock or datetime.now
        self.palette = Palette(settings.color, settings.palette)
        self._handlers: Dict[str, Handler] = {
            'help': self._cmd_help,
            'list': self._cmd_list,
            'add': self._cmd_add,
            'update': self._cmd_update,
            'delete': self._cmd_delete,
        }
        for name in MARK_COMMANDS:
            self._handlers[name] = self._cmd_mark

    def run(self, argv: Sequence[str]) -> int:
        """Handle the first command in argv and return the exit code.

        StorageError is not caught here; it is fatal and handled by main.
        """
        self.storage.ensure_exists()
        tasks = TaskList(self.storage.load())
        logger.debug("Loaded store: %s", tasks)

        if not argv:
            self.print_help()
            return EXIT_OK

        command = argv[0]
        params: List[Optional[str]] = list(argv[1:3])
        params += [None] * (2 - len(params))
        try:
            handler = self._handlers.get(command)
            if handler is None:
                raise UnknownCommand(command)
            handler(tasks, command, params[0], params[1])
        except UnknownCommand as exc:
            self._error(f"Error: {exc.message}\n")
            self.print_help()
            return exc.exit_code
        except CommandError as exc:
            self._error(f"Error: {exc.command}: {exc.message}")
            return exc.exit_code
        except TaskNotFound:
            # validation runs first, so only reachable if the list changed under us
            self._error(f"Error: {command}: Task does not exist")
            return NotFound.exit_code
        except EmptyStore as exc:
            self._echo(str(exc))
        return EXIT_OK

    # -------------------- command handlers --------------------
    def _cmd_help(self, tasks: TaskList, command: str, _p1: Optional[str], _p2: Optional[str]) -> None:
        self.print_help()

    def _cmd_list(self, tasks: TaskList, command: str, raw_status: Optional[str], _p2: Optional[str]) -> None:
        status = require_status(command, raw_status) if raw_status else None
        if tasks.is_empty:
            raise EmptyStore()
        selected = tasks.filter(status)
        if status and not selected:
            self._echo(f"You don't have any tasks with status: {status}")
            return
        for task in selected:
            self._echo(self.format_task(task))

    def _cmd_add(self, tasks: TaskList, command: str, raw_description: Optional[str], _p2: Optional[str]) -> None:
        description = require_description(command, raw_description)
        task = tasks.add(description, self._now())
        self._save(tasks)
        self._echo(f"Task added successfully (ID: {task.id})")

    def _cmd_update(self, tasks: TaskList, command: str, raw_id: Optional[str], raw_description: Optional[str]) -> None:
        task_id = require_id(command, raw_id, tasks)
        description = require_description(command, raw_description)
        tasks.update_description(task_id, description, self._now())
        self._save(tasks)
        self._echo(f"Task {task_id} updated.")

    def _cmd_delete(self, tasks: TaskList, command: str, raw_id: Optional[str], _p2: Optional[str]) -> None:
        task_id = require_id(command, raw_id, tasks)
        tasks.delete(task_id)
        self._save(tasks)
        self._echo(f"Task {task_id} deleted.")

    def _cmd_mark(self, tasks: TaskList, command: str, raw_id: Optional[str], _p2: Optional[str]) -> None:
        task_id = require_id(command, raw_id, tasks)
        status = MARK_COMMANDS[command]
        tasks.change_status(task_id, status)
        self._save(tasks)
        self._echo(f"Task {task_id} marked as {status}.")

    # -------------------- output --------------------
    def print_help(self) -> None:
        name_width = max(len(name) for name, _, _ in USAGE_ROWS)
        params_width = max(len(params) for _, params, _ in USAGE_ROWS)
        self._echo(self.palette.header('Task tracker CLI.') + '\n\nUsage:')
        for name, params, description in USAGE_ROWS:
            self._echo('  ' + name.ljust(name_width) + COLUMN_GAP + params.ljust(params_width) + COLUMN_GAP + description)

    def format_task(self, task: Task) -> str:
        p = self.palette
        head = f"{p.task_id(f'{task.id}.')} {p.status(f'{task.description} ({task.status})', task.status)}"
        times = p.muted(f"(created: {task.created_at}, last updated: {task.updated_at or NO_UPDATE})")
        return f"{head}\n{times}\n"

    def _echo(self, message: str) -> None:
        click.echo(message, file=self.out, color=self.palette.enabled)

    def _error(self, message: str) -> None:
        click.echo(message, file=self.err, err=True, color=self.palette.enabled)

    # -------------------- helpers --------------------
    def _now(self) -> str:
        return self.clock().strftime(self.settings.time_format)

    def _save(self, tasks: TaskList) -> None:
        self.storage.save(tasks.to_storage())
