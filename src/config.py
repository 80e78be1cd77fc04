"""Settings loaded from environment variables (+ optional .env).

Every variable uses the TASK_TRACKER_ prefix except the colour switches
NO_COLOR / FORCE_COLOR, which follow the common cross-tool convention.
Real environment variables take priority over the .env file.
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, TextIO

from dotenv import load_dotenv

ENV_PREFIX = "TASK_TRACKER"

DEFAULT_TIME_FORMAT = "%x %X"

# palette defaults (primary, todo, in-progress, done)
PALETTE_DEFAULTS: Dict[str, str] = {
    "PRIMARY": "#476EAE",
    "TODO": "#48B3AF",
    "INPROGRESS": "#F6FF99",
    "DONE": "#A7E399",
}


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_hex(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    h = raw.strip().lstrip("#")
    if len(h) == 6 and all(c in "0123456789abcdefABCDEF" for c in h):
        return "#" + h
    return default


def _color_enabled(stream: TextIO) -> bool:
    if os.getenv("NO_COLOR") is not None:
        return False
    if _env_bool("FORCE_COLOR", False):
        return True
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


@dataclass(frozen=True)
class Settings:
    tasks_file: Path = Path("tasks.json")
    log_level: str = "WARNING"
    time_format: str = DEFAULT_TIME_FORMAT
    color: bool = False
    palette: Optional[Dict[str, str]] = None

    @staticmethod
    def from_env(stream: Optional[TextIO] = None) -> "Settings":
        return Settings(
            tasks_file=_env_path(_k("FILE"), Path("tasks.json")),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            time_format=_env(_k("TIME_FORMAT"), DEFAULT_TIME_FORMAT),
            color=_color_enabled(stream or sys.stdout),
            palette={key: _env_hex(_k(key), hex_code) for key, hex_code in PALETTE_DEFAULTS.items()},
        )


def get_settings(dotenv_path: Optional[Path] = None) -> Settings:
    """Load .env (if any) without overriding the real environment, then build Settings."""
    load_dotenv(dotenv_path=dotenv_path or Path.cwd() / ".env", override=False)
    return Settings.from_env()
