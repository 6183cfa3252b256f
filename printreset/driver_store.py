"""Driver store access: staged printer driver packages and their removal via pnputil."""

import logging
from typing import List, Optional

from printreset.models import DriverPackage
from printreset.powershell import CommandRunner

logger = logging.getLogger(__name__)

PRINTER_CLASS = "printer"


class DriverStore:
    """Lists and deletes third-party driver packages from the online image."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def list_packages(self) -> List[DriverPackage]:
        rows = self.runner.powershell_json(
            "Get-WindowsDriver -Online | Select-Object Driver, ClassName, OriginalFileName, ProviderName"
        )
        return [
            DriverPackage(
                identifier=str(row.get("Driver") or ""),
                class_name=str(row.get("ClassName") or ""),
                original_name=str(row.get("OriginalFileName") or ""),
                provider=str(row.get("ProviderName") or ""),
            )
            for row in rows
            if row.get("Driver")
        ]

    def list_printer_packages(self) -> List[DriverPackage]:
        return [p for p in self.list_packages() if p.class_name.lower() == PRINTER_CLASS]

    def remove_package(self, identifier: str) -> None:
        """Delete a package without /force, so Windows refuses packages still bound to a device."""
        self.runner.run(["pnputil.exe", "/delete-driver", identifier])
