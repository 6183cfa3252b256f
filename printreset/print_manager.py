"""
Print subsystem access through the PrintManagement cmdlets.

Enumerations return fresh model objects on every call; nothing is cached,
so callers decide when a snapshot is taken.
"""

import logging
import re
from typing import List, Optional

from printreset.models import Printer, PrinterDriver, PrinterPort
from printreset.powershell import CommandRunner, quote

logger = logging.getLogger(__name__)

# Serial, parallel, file and null ports are never removed
STANDARD_PORT_PATTERN = re.compile(r"^(COM\d+|LPT\d+|FILE|NUL)\s*:?$", re.IGNORECASE)

LOCAL_PORT_DESCRIPTION = "local port"
LOCAL_PORT_MONITOR = "local monitor"


def is_standard_port(name: str) -> bool:
    return bool(STANDARD_PORT_PATTERN.match(name.strip()))


def is_local_port(port: PrinterPort) -> bool:
    """True for ports owned by the Local Port monitor."""
    return (
        port.description.strip().lower() == LOCAL_PORT_DESCRIPTION
        or port.monitor.strip().lower() == LOCAL_PORT_MONITOR
    )


def _text(value) -> str:
    return "" if value is None else str(value)


class PrintManager:
    """Enumerates and removes printers, printer drivers and printer ports."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def list_printers(self) -> List[Printer]:
        rows = self.runner.powershell_json("Get-Printer | Select-Object Name, DriverName, PortName")
        return [
            Printer(
                name=_text(row.get("Name")),
                driver_name=_text(row.get("DriverName")),
                port_name=_text(row.get("PortName")),
            )
            for row in rows
            if row.get("Name")
        ]

    def remove_printer(self, name: str) -> None:
        self.runner.powershell(f"Remove-Printer -Name {quote(name)}")

    def list_drivers(self) -> List[PrinterDriver]:
        rows = self.runner.powershell_json(
            "Get-PrinterDriver | Select-Object Name, PrinterEnvironment"
        )
        return [
            PrinterDriver(name=_text(row.get("Name")), environment=_text(row.get("PrinterEnvironment")))
            for row in rows
            if row.get("Name")
        ]

    def remove_driver(self, name: str, environment: Optional[str] = None) -> None:
        """Remove a printer driver, optionally qualified by its environment."""
        script = f"Remove-PrinterDriver -Name {quote(name)}"
        if environment:
            script += f" -PrinterEnvironment {quote(environment)}"
        self.runner.powershell(script)

    def list_ports(self) -> List[PrinterPort]:
        rows = self.runner.powershell_json(
            "Get-PrinterPort | Select-Object Name, PortMonitor, Description"
        )
        return [
            PrinterPort(
                name=_text(row.get("Name")),
                monitor=_text(row.get("PortMonitor")),
                description=_text(row.get("Description")),
            )
            for row in rows
            if row.get("Name")
        ]

    def remove_port(self, name: str) -> None:
        self.runner.powershell(f"Remove-PrinterPort -Name {quote(name)}")
