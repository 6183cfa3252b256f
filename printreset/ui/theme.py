"""
printer-reset UI theme - color constants and styling definitions.
"""

from rich.style import Style
from rich.theme import Theme

COLORS = {
    "success": "#22c55e",
    "error": "#ef4444",
    "warning": "#eab308",
    "info": "#3b82f6",
    "secondary": "#6b7280",
    "primary": "#ffffff",
    "brand": "#0ea5e9",
    "panel_border": "#4b5563",
    "highlight": "#fbbf24",
    "muted": "#9ca3af",
}

SYMBOLS = {
    "error": "✗",
    "warning": "⚠",
}

RESET_THEME = Theme({
    "success": Style(color=COLORS["success"], bold=True),
    "error": Style(color=COLORS["error"], bold=True),
    "warning": Style(color=COLORS["warning"], bold=True),
    "info": Style(color=COLORS["info"]),
    "secondary": Style(color=COLORS["secondary"], dim=True),
    "primary": Style(color=COLORS["primary"]),
    "brand": Style(color=COLORS["brand"], bold=True),
    "highlight": Style(color=COLORS["highlight"], bold=True),
    "muted": Style(color=COLORS["muted"]),
    "panel_border": Style(color=COLORS["panel_border"]),
    "logging.level.info": Style(color=COLORS["info"]),
    "logging.level.warning": Style(color=COLORS["warning"], bold=True),
    "logging.level.error": Style(color=COLORS["error"], bold=True),
})
