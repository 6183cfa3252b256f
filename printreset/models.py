"""
Data models for printer-reset.

Everything here is transient: printers, drivers and ports are owned by the
print subsystem and only mirrored for the length of one enumeration.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Printer:
    """An installed printer queue."""

    name: str
    driver_name: str = ""
    port_name: str = ""


@dataclass(frozen=True)
class PrinterDriver:
    """An installed printer driver, keyed by name."""

    name: str
    environment: str = ""  # "Windows x64", "Windows NT x86", ...


@dataclass(frozen=True)
class PrinterPort:
    """A printer port and the monitor that owns it."""

    name: str
    monitor: str = ""  # "Local Monitor", "TCPMON.DLL", ...
    description: str = ""  # "Local Port", "Standard TCP/IP Port", ...


@dataclass(frozen=True)
class DriverPackage:
    """A driver package staged in the driver store."""

    identifier: str  # published inf name, e.g. oem12.inf
    class_name: str = ""
    original_name: str = ""
    provider: str = ""


@dataclass
class RegistryBackup:
    """A .reg export written before a key's children were deleted."""

    key_path: str
    file_path: Path
    created_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class InUseSnapshot:
    """Driver and port names referenced by the printers enumerated at one instant."""

    printers: tuple = ()
    driver_names: frozenset = frozenset()
    port_names: frozenset = frozenset()

    @classmethod
    def from_printers(cls, printers: List[Printer]) -> "InUseSnapshot":
        return cls(
            printers=tuple(printers),
            driver_names=frozenset(p.driver_name for p in printers if p.driver_name),
            port_names=frozenset(p.port_name for p in printers if p.port_name),
        )

    def driver_in_use(self, name: str) -> bool:
        return name in self.driver_names

    def port_in_use(self, name: str) -> bool:
        return name in self.port_names


class ItemKind(Enum):
    """What kind of item a cleanup outcome refers to."""

    REGISTRY = "registry"
    RECENT = "recent"
    TEMP = "temp"
    SPOOL = "spool"
    PRINTER = "printer"
    DRIVER = "driver"
    PORT = "port"
    PACKAGE = "package"


@dataclass
class ItemOutcome:
    """Result of one attempted cleanup action."""

    kind: ItemKind
    name: str
    succeeded: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls, kind: ItemKind, name: str) -> "ItemOutcome":
        return cls(kind=kind, name=name, succeeded=True)

    @classmethod
    def failed(cls, kind: ItemKind, name: str, reason: Any) -> "ItemOutcome":
        return cls(kind=kind, name=name, succeeded=False, reason=str(reason))


@dataclass
class CleanupSummary:
    """Aggregated outcome of a run.

    Counts are derived from the outcome list rather than tracked separately.
    """

    outcomes: List[ItemOutcome] = field(default_factory=list)
    backups: List[RegistryBackup] = field(default_factory=list)
    user_level_only: bool = False
    removed_all_printers: bool = False
    declined: bool = False

    def add(self, outcome: ItemOutcome) -> ItemOutcome:
        self.outcomes.append(outcome)
        return outcome

    def extend(self, outcomes: List[ItemOutcome]) -> None:
        self.outcomes.extend(outcomes)

    def count(self, kind: ItemKind, succeeded: bool = True) -> int:
        return sum(1 for o in self.outcomes if o.kind == kind and o.succeeded == succeeded)

    @property
    def drivers_removed(self) -> int:
        # Get-PrinterDriver lists a name once per environment
        return len({o.name for o in self.outcomes if o.kind == ItemKind.DRIVER and o.succeeded})

    @property
    def ports_removed(self) -> int:
        return self.count(ItemKind.PORT)

    @property
    def printers_removed(self) -> int:
        return self.count(ItemKind.PRINTER)

    @property
    def failures(self) -> List[ItemOutcome]:
        # Driver-store removals fail routinely and are not reported
        return [o for o in self.outcomes if not o.succeeded and o.kind != ItemKind.PACKAGE]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "user_level_only": self.user_level_only,
            "declined": self.declined,
            "removed_all_printers": self.removed_all_printers,
            "printers_removed": self.printers_removed,
            "drivers_removed": self.drivers_removed,
            "ports_removed": self.ports_removed,
            "backups": [str(b.file_path) for b in self.backups],
            "failures": [
                {"kind": o.kind.value, "name": o.name, "reason": o.reason} for o in self.failures
            ],
        }
