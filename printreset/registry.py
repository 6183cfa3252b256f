"""
Registry access for printer-reset.

Keys are written the reg.exe way ("HKCU\\Printers\\Connections"). Exports go
through reg.exe so the backup is a plain .reg file that can be merged back by
hand; existence checks and deletes go through the PowerShell registry
provider.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from printreset.models import RegistryBackup
from printreset.powershell import CommandRunner, quote

logger = logging.getLogger(__name__)

HIVES = {
    "HKCU": "HKEY_CURRENT_USER",
    "HKLM": "HKEY_LOCAL_MACHINE",
    "HKCR": "HKEY_CLASSES_ROOT",
    "HKU": "HKEY_USERS",
    "HKCC": "HKEY_CURRENT_CONFIG",
}

BACKUP_PREFIX = "printreset"
BACKUP_TIMESTAMP = "%Y%m%d_%H%M%S"


def provider_path(key: str) -> str:
    """Translate a reg.exe style key into a PowerShell provider path."""
    hive, _, rest = key.partition("\\")
    hive = HIVES.get(hive.upper(), hive)
    return f"Registry::{hive}\\{rest}" if rest else f"Registry::{hive}"


def backup_filename(key: str, when: datetime) -> str:
    """File name for a backup of `key` taken at `when`."""
    slug = re.sub(r"[^A-Za-z0-9]+", "_", key).strip("_")
    return f"{BACKUP_PREFIX}_{slug}_{when.strftime(BACKUP_TIMESTAMP)}.reg"


class RegistryCleaner:
    """Checks, exports and clears registry keys."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def exists(self, key: str) -> bool:
        output = self.runner.powershell(f"Test-Path -LiteralPath {quote(provider_path(key))}")
        return output.strip().lower() == "true"

    def export(self, key: str, backup_dir: Path, when: Optional[datetime] = None) -> RegistryBackup:
        """Export `key` and its subtree to a timestamped .reg file.

        Raises:
            CommandError: If reg.exe fails
        """
        when = when or datetime.now()
        backup_dir.mkdir(parents=True, exist_ok=True)
        target = backup_dir / backup_filename(key, when)
        self.runner.run(["reg.exe", "export", key, str(target), "/y"])
        logger.debug(f"Exported {key} to {target}")
        return RegistryBackup(key_path=key, file_path=target, created_at=when)

    def clear_children(self, key: str) -> None:
        """Delete every subkey and value under `key`, keeping the key itself.

        Raises:
            CommandError: If any delete fails
        """
        path = quote(provider_path(key))
        self.runner.powershell(
            f"$key = {path}; "
            "Get-ChildItem -LiteralPath $key | Remove-Item -Recurse -Force; "
            "(Get-Item -LiteralPath $key).Property | "
            "Where-Object { $_ -ne '(default)' } | "
            "ForEach-Object { Remove-ItemProperty -LiteralPath $key -Name $_ -Force }"
        )
