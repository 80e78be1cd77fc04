"""Persistence helpers (ensure/load/save) for the task file.

File shape: {"tasks": null | [Task, ...]}, pretty-printed with 2-space
indent. "tasks": null means the file was created but nothing was ever
written to it; an empty list is a valid state after deleting the last task.
"""
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from models import Task

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = Path("tasks.json")

StorageRecord = Dict[str, Any]


class StorageError(Exception):
    """Backing file could not be read, parsed or written."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class Storage:
    def __init__(self, path: Path = DEFAULT_TASKS_FILE):
        self.path = Path(path)

    def ensure_exists(self) -> bool:
        """Create the file with an empty record if absent.

        Returns True when the file was created by this call.
        """
        if self.path.exists():
            return False
        logger.debug("Creating empty task file at %s", self.path)
        self._write({"tasks": None})
        return True

    def load(self) -> Optional[List[Task]]:
        """Read and parse the whole file.

        Returns None for a store that has never held tasks. Any I/O or
        format problem raises StorageError; callers treat it as fatal.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(self.path, f"cannot read file ({exc.strerror})") from exc
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageError(self.path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
        if not isinstance(data, dict) or "tasks" not in data:
            raise StorageError(self.path, 'expected an object with a "tasks" key')
        raw_tasks = data["tasks"]
        if raw_tasks is None:
            logger.debug("Loaded %s: no tasks yet", self.path)
            return None
        if not isinstance(raw_tasks, list):
            raise StorageError(self.path, '"tasks" must be null or a list')
        tasks: List[Task] = []
        for index, raw in enumerate(raw_tasks):
            if not isinstance(raw, dict):
                raise StorageError(self.path, f"task #{index + 1} is not an object")
            try:
                tasks.append(Task.from_dict(raw))
            except ValueError as exc:
                raise StorageError(self.path, f"task #{index + 1}: {exc}") from exc
        logger.debug("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Optional[Sequence[Task]]) -> None:
        """Persist the full collection (whole-file rewrite)."""
        record: StorageRecord = {
            "tasks": None if tasks is None else [t.to_dict() for t in tasks]
        }
        self._write(record)
        logger.debug("Saved %d task(s) to %s", len(tasks or ()), self.path)

    def _write(self, record: StorageRecord) -> None:
        # temp file + os.replace so a crash mid-write never leaves a truncated file;
        # writes go to the symlink target so a linked task file stays linked
        target = Path(os.path.realpath(self.path))
        directory = target.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            mode = _file_mode(target)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(record, f, indent=2, ensure_ascii=False)
                    f.write("\n")
                # mkstemp creates 0600; keep the existing mode (or the umask default for a new file)
                os.chmod(tmp_name, mode)
                os.replace(tmp_name, target)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageError(self.path, f"cannot write file ({exc.strerror})") from exc


def _file_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
