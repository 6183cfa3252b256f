"""
Thin wrapper around the external commands printer-reset drives.

Every Windows management call goes through here, either as a PowerShell
script or as a plain executable (reg.exe, pnputil.exe), so tests only need
to patch subprocess.run in this module.
"""

import json
import logging
import subprocess
from typing import Any, Dict, List, Optional

from printreset.errors import CommandError

logger = logging.getLogger(__name__)

POWERSHELL = "powershell.exe"


def quote(value: str) -> str:
    """Quote a value as a PowerShell single-quoted string literal."""
    return "'" + value.replace("'", "''") + "'"


class CommandRunner:
    """Runs external commands and PowerShell scripts.

    Args:
        timeout: Optional timeout in seconds applied to every command
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(self, command: List[str]) -> str:
        """Run a command and return its stdout.

        Raises:
            CommandError: If the command cannot start, times out or exits non-zero
        """
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(command, stderr=f"timed out after {e.timeout}s") from e
        except OSError as e:
            raise CommandError(command, stderr=str(e)) from e

        if result.returncode != 0:
            raise CommandError(command, result.returncode, result.stderr or result.stdout or "")
        return (result.stdout or "").strip()

    def powershell(self, script: str) -> str:
        """Run a PowerShell script with terminating errors enabled."""
        return self.run(
            [
                POWERSHELL,
                "-NoProfile",
                "-NonInteractive",
                "-ExecutionPolicy",
                "Bypass",
                "-Command",
                f"$ErrorActionPreference = 'Stop'; {script}",
            ]
        )

    def powershell_json(self, script: str) -> List[Dict[str, Any]]:
        """Run a PowerShell pipeline and parse its ConvertTo-Json output.

        ConvertTo-Json emits a bare object for a single result and nothing
        for an empty pipeline, so both are normalized to a list.
        """
        raw = self.powershell(f"{script} | ConvertTo-Json -Compress")
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CommandError([POWERSHELL], stderr=f"unparseable output: {e}") from e
        if isinstance(data, dict):
            return [data]
        return [item for item in data if isinstance(item, dict)]
