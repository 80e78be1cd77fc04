"""Task list logic: holds the loaded tasks, id management and mutation.

Ids are positional: next id is count + 1 and a delete renumbers every
remaining task to its 1-based index, so ids are always 1..N in list order.
All methods mutate in memory only; the caller persists via Storage.
"""
import logging
from typing import List, Optional, Sequence

from models import STATUSES, TODO, Task

logger = logging.getLogger(__name__)


class TaskNotFound(LookupError):
    def __init__(self, task_id: int):
        super().__init__(f"Task id {task_id} not found.")
        self.task_id = task_id


class EmptyStore(LookupError):
    def __init__(self) -> None:
        super().__init__("You don't have any tasks")


class TaskList:
    def __init__(self, tasks: Optional[Sequence[Task]] = None):
        # None (never written) is kept distinct from [] so an untouched file stays {"tasks": null}
        self._tasks: Optional[List[Task]] = None if tasks is None else list(tasks)

    # -------------------- queries --------------------
    @property
    def is_empty(self) -> bool:
        return not self._tasks

    def all_tasks(self) -> List[Task]:
        return list(self._tasks or [])

    def get(self, task_id: int) -> Optional[Task]:
        for task in self._tasks or []:
            if task.id == task_id:
                return task
        return None

    def exists(self, task_id: int) -> bool:
        return self.get(task_id) is not None

    def filter(self, status: Optional[str] = None) -> List[Task]:
        """All tasks, or only those in `status`, in list order."""
        tasks = self.all_tasks()
        if status is None:
            return tasks
        return [t for t in tasks if t.status == status]

    # -------------------- id management --------------------
    def next_id(self) -> int:
        if not self._tasks:
            return 1
        return len(self._tasks) + 1

    def renumber_sequential(self) -> None:
        """Renumber tasks starting at 1 preserving list order."""
        for new_id, task in enumerate(self._tasks or [], start=1):
            task.id = new_id

    # -------------------- task operations --------------------
    def add(self, description: str, now: str) -> Task:
        task = Task(id=self.next_id(), description=description, status=TODO, created_at=now)
        if self._tasks is None:
            self._tasks = []
        self._tasks.append(task)
        logger.debug("Added task %d", task.id)
        return task

    def update_description(self, task_id: int, description: str, now: str) -> Task:
        task = self._require(task_id)
        task.description = description
        task.updated_at = now
        logger.debug("Updated description of task %d", task_id)
        return task

    def delete(self, task_id: int) -> Task:
        task = self._require(task_id)
        remaining = self._tasks or []
        remaining.remove(task)
        self.renumber_sequential()
        logger.debug("Deleted task %d; %d task(s) renumbered", task_id, len(remaining))
        return task

    def change_status(self, task_id: int, status: str) -> Task:
        """Set status only; updated_at tracks description edits and is left as is."""
        if status not in STATUSES:
            raise ValueError(f"Invalid status: {status}")
        task = self._require(task_id)
        task.status = status
        logger.debug("Task %d status -> %s", task_id, status)
        return task

    def _require(self, task_id: int) -> Task:
        if not self._tasks:
            raise EmptyStore()
        task = self.get(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        return task

    # -------------------- serialization --------------------
    def to_storage(self) -> Optional[List[Task]]:
        return None if self._tasks is None else list(self._tasks)

    def __str__(self) -> str:
        counts = {s: len(self.filter(s)) for s in STATUSES}
        return (f'Todo: {counts["todo"]} tasks, '
                f'In-Progress: {counts["in-progress"]} tasks, '
                f'Done: {counts["done"]} tasks')
