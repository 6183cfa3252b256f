"""printer-reset UI - terminal output components."""

from .console import ResetConsole, console
from .panels import summary_panel
from .prompts import confirm
from .theme import COLORS, RESET_THEME, SYMBOLS

__all__ = [
    "console", "ResetConsole", "COLORS", "SYMBOLS", "RESET_THEME",
    "confirm", "summary_panel",
]
