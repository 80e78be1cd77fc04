# tests/test_main.py

from __future__ import annotations

import json
import locale
import logging
from pathlib import Path

import pytest

import main


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path: Path, tasks_file: Path):
    """Run main() from an empty cwd with the task file pointed at tmp_path.

    main() reconfigures the root logger; restore it so later tests keep pytest's handlers.
    locale.setlocale is stubbed so the process locale is never changed.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TASK_TRACKER_FILE", str(tasks_file))
    monkeypatch.setenv("TASK_TRACKER_LOG_LEVEL", "WARNING")
    monkeypatch.setattr(locale, "setlocale", lambda category, value=None: "C")
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_main_exits_zero_on_success(tasks_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.main(["add", "buy milk"])

    assert excinfo.value.code == 0
    assert json.loads(tasks_file.read_text())["tasks"][0]["description"] == "buy milk"


def test_main_exit_code_for_user_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.main(["delete", "1"])
    assert excinfo.value.code == 4


def test_main_corrupt_file_is_fatal(tasks_file: Path, capsys) -> None:
    tasks_file.write_text("{broken")

    with pytest.raises(SystemExit) as excinfo:
        main.main(["add", "x"])

    assert excinfo.value.code == 5
    assert "Cannot use task file" in capsys.readouterr().err
    assert tasks_file.read_text() == "{broken"


def test_main_reports_storage_error_on_stderr_when_logging_is_quiet(monkeypatch, tasks_file: Path, capsys) -> None:
    monkeypatch.setenv("TASK_TRACKER_LOG_LEVEL", "CRITICAL")
    tasks_file.write_text("{broken")

    with pytest.raises(SystemExit) as excinfo:
        main.main(["list"])

    assert excinfo.value.code == 5
    err = capsys.readouterr().err
    assert err.startswith(f"Error: list: {tasks_file}: invalid JSON")
    assert "Cannot use task file" not in err


def test_main_switches_timestamps_to_user_locale(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(locale, "setlocale", lambda category, value=None: calls.append((category, value)))

    with pytest.raises(SystemExit):
        main.main(["help"])

    assert calls == [(locale.LC_TIME, "")]


def test_main_falls_back_when_locale_is_unavailable(monkeypatch, tasks_file: Path) -> None:
    def unavailable(category, value=None):
        raise locale.Error("unsupported locale setting")

    monkeypatch.setattr(locale, "setlocale", unavailable)

    with pytest.raises(SystemExit) as excinfo:
        main.main(["add", "buy milk"])

    assert excinfo.value.code == 0
    assert json.loads(tasks_file.read_text())["tasks"][0]["createdAt"]
