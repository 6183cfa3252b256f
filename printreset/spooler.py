"""Print spooler service control."""

import logging
from typing import Optional

from printreset.errors import CommandError, SpoolerError
from printreset.powershell import CommandRunner, quote

logger = logging.getLogger(__name__)


class SpoolerService:
    """Stops, starts and queries the print spooler service.

    Args:
        name: Service name, "Spooler" on every supported Windows release
        runner: Command runner used for the service cmdlets
    """

    def __init__(self, name: str = "Spooler", runner: Optional[CommandRunner] = None):
        self.name = name
        self.runner = runner or CommandRunner()

    def status(self) -> str:
        """Return the service state as reported by Get-Service ("Running", "Stopped", ...)."""
        return self.runner.powershell(f"(Get-Service -Name {quote(self.name)}).Status.ToString()")

    def stop(self) -> None:
        try:
            self.runner.powershell(f"Stop-Service -Name {quote(self.name)} -Force")
        except CommandError as e:
            raise SpoolerError(f"Failed to stop {self.name}: {e}") from e

    def start(self) -> None:
        try:
            self.runner.powershell(f"Start-Service -Name {quote(self.name)}")
        except CommandError as e:
            raise SpoolerError(f"Failed to start {self.name}: {e}") from e

    def ensure_running(self) -> bool:
        """Start the service if it is not running. Never raises.

        Returns:
            bool: True if the service is (now) running
        """
        try:
            if self.status().lower() == "running":
                return True
            self.start()
            return True
        except (CommandError, SpoolerError) as e:
            logger.error(f"Could not bring {self.name} back up: {e}")
            return False
