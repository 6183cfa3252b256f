"""Exception types raised by printer-reset."""

from typing import List, Optional


class PrintResetError(Exception):
    """Base class for all printer-reset failures."""


class CommandError(PrintResetError):
    """An external command failed or could not be launched."""

    def __init__(self, command: List[str], returncode: Optional[int] = None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = self.stderr or f"exit status {returncode}"
        super().__init__(f"{command[0]} failed: {message}")


class SpoolerError(PrintResetError):
    """The print spooler could not be stopped or started. Always fatal."""


class ResetDeclined(PrintResetError):
    """The operator declined the printer removal confirmation."""


class ConfigError(PrintResetError):
    """The settings file could not be read or holds invalid values."""
