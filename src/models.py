"""Data models for the task tracker.

Exposes the Task dataclass plus the status keys. Status values are the
exact strings written to tasks.json ("todo", "in-progress", "done"), and
field names on disk keep their camelCase form (createdAt / updatedAt) so
files stay compatible with older trackers.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

TODO = "todo"
IN_PROGRESS = "in-progress"
DONE = "done"
STATUSES: Tuple[str, ...] = (TODO, IN_PROGRESS, DONE)

_REQUIRED_FIELDS = ("id", "description", "status", "createdAt")


@dataclass
class Task:
    """A single tracked task.

    Fields:
        id: Positional integer id (renumbered 1..N after a delete).
        description: Free text.
        status: One of: "todo", "in-progress", "done".
        created_at: Timestamp string set once when the task is added.
        updated_at: Timestamp string of the last description edit (None if never edited).
    """
    id: int
    description: str
    status: str = TODO
    created_at: str = ""
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        missing = [k for k in _REQUIRED_FIELDS if k not in raw]
        if missing:
            raise ValueError(f"task record missing field(s): {', '.join(missing)}")
        tid = raw["id"]
        if not isinstance(tid, int) or isinstance(tid, bool):
            raise ValueError(f"task id must be an integer, got {tid!r}")
        status = raw["status"]
        if status not in STATUSES:
            raise ValueError(f"unknown task status {status!r}")
        for key in ("description", "createdAt"):
            if not isinstance(raw[key], str):
                raise ValueError(f"task {key} must be a string, got {raw[key]!r}")
        updated_at = raw.get("updatedAt")
        if updated_at is not None and not isinstance(updated_at, str):
            raise ValueError(f"task updatedAt must be a string or null, got {updated_at!r}")
        return cls(
            id=tid,
            description=raw["description"],
            status=status,
            created_at=raw["createdAt"],
            updated_at=updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, description={self.description}, status={self.status})"
