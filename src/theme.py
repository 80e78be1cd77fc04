"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disabled entirely when Settings.color is False (non-TTY, NO_COLOR).
- Palette hex values come from Settings (env overrides already applied).
"""
from __future__ import annotations
import os
from typing import Dict, Mapping, Optional

from config import PALETTE_DEFAULTS
from models import DONE, IN_PROGRESS, TODO

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    """Generate ANSI escape code for truecolor foreground."""
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _supports_truecolor() -> bool:
    colorterm = os.environ.get("COLORTERM", "").lower()
    return any(tok in colorterm for tok in ("truecolor", "24bit"))


class Palette:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    def __init__(self, enabled: bool, hexes: Optional[Mapping[str, str]] = None):
        self.enabled = enabled
        self._truecolor = enabled and _supports_truecolor()
        hexes = {**PALETTE_DEFAULTS, **(hexes or {})}
        self.primary = self._from_hex(hexes["PRIMARY"])
        self.status_colors: Dict[str, str] = {
            TODO: self._from_hex(hexes["TODO"]),
            IN_PROGRESS: self._from_hex(hexes["INPROGRESS"]),
            DONE: self._from_hex(hexes["DONE"]),
        }

    def _from_hex(self, hex_code: str) -> str:
        if not self.enabled:
            return ''
        r, g, b = _hex_to_rgb(hex_code)
        if self._truecolor:
            return _fg_truecolor(r, g, b)
        return _fg_256(r, g, b)

    def color(self, text: str, *styles: str) -> str:
        """Apply ANSI styles to a given text."""
        if not self.enabled:
            return text
        return ''.join(styles) + text + self.RESET

    def task_id(self, text: str) -> str:
        return self.color(text, self.primary, self.BOLD)

    def status(self, text: str, status: str) -> str:
        return self.color(text, self.status_colors.get(status, ''))

    def muted(self, text: str) -> str:
        return self.color(text, self.DIM, self.primary)

    def header(self, text: str) -> str:
        return self.color(text, self.primary, self.BOLD)
