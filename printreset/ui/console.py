"""Themed console singleton with semantic message methods."""

from typing import Optional

from rich.console import Console as RichConsole

from .theme import RESET_THEME, SYMBOLS


class ResetConsole:
    """Themed console shared by logging, prompts and panels."""

    _instance: Optional["ResetConsole"] = None

    def __new__(cls) -> "ResetConsole":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._console = RichConsole(theme=RESET_THEME, stderr=True)
        return cls._instance

    @property
    def rich(self) -> RichConsole:
        return self._console

    def print(self, *args, **kwargs) -> None:
        self._console.print(*args, **kwargs)

    def input(self, prompt: str = "") -> str:
        return self._console.input(prompt)

    def error(self, message: str) -> None:
        self._console.print(f"[error]{SYMBOLS['error']} {message}[/]")

    def warning(self, message: str) -> None:
        self._console.print(f"[warning]{SYMBOLS['warning']}  {message}[/]")


console = ResetConsole()
