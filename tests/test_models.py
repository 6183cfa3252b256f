from pathlib import Path

from printreset.models import (
    CleanupSummary,
    InUseSnapshot,
    ItemKind,
    ItemOutcome,
    Printer,
    RegistryBackup,
)


def test_snapshot_collects_names():
    snapshot = InUseSnapshot.from_printers(
        [Printer("A", "Shared", "IP_1"), Printer("B", "Shared", ""), Printer("C", "", "USB001")]
    )

    assert snapshot.driver_names == frozenset({"Shared"})
    assert snapshot.port_names == frozenset({"IP_1", "USB001"})
    assert not snapshot.driver_in_use("")


def test_summary_counts_come_from_outcomes():
    summary = CleanupSummary()
    summary.add(ItemOutcome.ok(ItemKind.DRIVER, "D1"))
    summary.add(ItemOutcome.ok(ItemKind.DRIVER, "D2"))
    summary.add(ItemOutcome.failed(ItemKind.DRIVER, "D3", "in use"))
    summary.add(ItemOutcome.ok(ItemKind.PORT, "IP_1"))
    summary.add(ItemOutcome.ok(ItemKind.PRINTER, "P1"))

    assert summary.drivers_removed == 2
    assert summary.ports_removed == 1
    assert summary.printers_removed == 1
    assert [o.name for o in summary.failures] == ["D3"]


def test_package_failures_not_reported():
    summary = CleanupSummary()
    summary.add(ItemOutcome.failed(ItemKind.PACKAGE, "oem1.inf", "in use"))

    assert summary.failures == []
    assert summary.count(ItemKind.PACKAGE, succeeded=False) == 1


def test_to_dict():
    summary = CleanupSummary(user_level_only=True)
    summary.backups.append(RegistryBackup("HKCU\\A", Path("backup.reg")))

    data = summary.to_dict()

    assert data["user_level_only"] is True
    assert data["backups"] == ["backup.reg"]
    assert data["failures"] == []


def test_driver_removed_in_several_environments_counts_once():
    summary = CleanupSummary()
    summary.add(ItemOutcome.ok(ItemKind.DRIVER, "HP Universal"))
    summary.add(ItemOutcome.ok(ItemKind.DRIVER, "HP Universal"))
    summary.add(ItemOutcome.ok(ItemKind.DRIVER, "Canon Generic"))

    assert summary.drivers_removed == 2
    assert summary.to_dict()["drivers_removed"] == 2
