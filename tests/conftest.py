# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from cli import CLI
from config import Settings
from storage import Storage

FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5)
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
FIXED_STAMP = "2026-01-02 03:04:05"


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def settings(tasks_file: Path) -> Settings:
    """
    Settings built directly (not from env) so tests are deterministic:
    fixed time format, colour off.
    """
    return Settings(tasks_file=tasks_file, time_format=TIME_FORMAT, color=False)


@pytest.fixture()
def storage(tasks_file: Path) -> Storage:
    return Storage(tasks_file)


@pytest.fixture()
def cli(storage: Storage, settings: Settings) -> CLI:
    return CLI(storage, settings, clock=lambda: FIXED_NOW)


@pytest.fixture()
def fixed_stamp() -> str:
    """Timestamp string the `cli` fixture's clock produces."""
    return FIXED_STAMP
