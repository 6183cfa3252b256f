"""
Cleanup Orchestrator.

Runs the reset in two phases. The user phase always runs; the system phase
runs only for administrators who did not ask for a user-level run:

    user:   registry preferences -> recent shortcuts -> temp leftovers
    system: stop spooler -> purge queue -> start spooler -> printers
            -> in-use snapshot -> drivers -> ports -> driver store

Per-item failures are recorded as ItemOutcome entries and the run goes on.
Only spooler control failures (and anything unexpected) abort the system
phase, after a best-effort attempt to leave the spooler running.
"""

import logging
import time
from typing import Callable, List, Optional

from printreset.config import CleanupContext
from printreset.driver_store import DriverStore
from printreset.errors import CommandError, PrintResetError, ResetDeclined
from printreset.files import FileCleaner
from printreset.models import (
    CleanupSummary,
    InUseSnapshot,
    ItemKind,
    ItemOutcome,
    Printer,
    PrinterDriver,
    PrinterPort,
)
from printreset.powershell import CommandRunner
from printreset.print_manager import PrintManager, is_local_port, is_standard_port
from printreset.registry import RegistryCleaner
from printreset.spooler import SpoolerService

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]


def _decline(message: str) -> bool:
    return False


class CleanupOrchestrator:
    """Runs the printer reset against injectable host capabilities.

    Args:
        context: Resolved options, settings, privilege and paths
        registry: Registry capability
        files: Filesystem capability
        spooler: Spooler service capability
        printers: Print subsystem capability
        driver_store: Driver store capability
        confirm: Asked before removing all printers; declines when omitted
        sleep: Used for the settle delay after the spooler restarts
    """

    def __init__(
        self,
        context: CleanupContext,
        registry: Optional[RegistryCleaner] = None,
        files: Optional[FileCleaner] = None,
        spooler: Optional[SpoolerService] = None,
        printers: Optional[PrintManager] = None,
        driver_store: Optional[DriverStore] = None,
        confirm: Optional[ConfirmFn] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.context = context
        settings = context.settings
        runner = CommandRunner(timeout=settings.command_timeout)
        self.registry = registry or RegistryCleaner(runner)
        self.files = files or FileCleaner()
        self.spooler = spooler or SpoolerService(settings.spooler_service, runner)
        self.printers = printers or PrintManager(runner)
        self.driver_store = driver_store or DriverStore(runner)
        self.confirm = confirm or _decline
        self.sleep = sleep

    def run(self) -> CleanupSummary:
        """Run the reset.

        Returns:
            CleanupSummary: Outcomes of the run; `declined` is set when the
                operator refused printer removal

        Raises:
            SpoolerError: If the spooler could not be stopped or restarted
        """
        summary = CleanupSummary(user_level_only=self.context.user_level_only)

        self.check_privilege()

        self.run_user_phase(summary)
        if self.context.user_level_only:
            logger.info("User-level cleanup complete; skipping system-level cleanup")
            self.log_summary(summary)
            return summary

        try:
            self.run_system_phase(summary)
        except ResetDeclined:
            summary.declined = True
            logger.info("Printer removal declined; nothing else was changed")
            return summary
        except BaseException as e:
            # Includes KeyboardInterrupt: the spooler may already be stopped
            logger.error(f"System-level cleanup aborted: {str(e) or type(e).__name__}")
            logger.info("Making sure the print spooler is running")
            self.spooler.ensure_running()
            raise

        self.log_summary(summary)
        return summary

    def check_privilege(self) -> None:
        if not self.context.is_admin:
            logger.warning(
                "Not running as administrator; only user-level cleanup will be performed"
            )
        elif self.context.options.user_level_only:
            logger.info("User-level cleanup requested")

    # -- user phase -----------------------------------------------------

    def run_user_phase(self, summary: CleanupSummary) -> None:
        settings = self.context.settings

        logger.info("Clearing user printer preferences from the registry")
        self.clear_registry(summary)

        logger.info("Removing printer shortcuts from Recent Items")
        summary.extend(self.files.purge_recent(self.context.recent_dir, settings.name_pattern))

        logger.info("Removing printer leftovers from temp folders")
        summary.extend(self.files.purge_temp(self.context.temp_dirs, settings.name_pattern))

    def clear_registry(self, summary: CleanupSummary) -> None:
        """Back up, then empty, each configured registry key."""
        for key in self.context.settings.registry_locations:
            try:
                if not self.registry.exists(key):
                    logger.debug(f"Registry key not present: {key}")
                    continue
                backup = self.registry.export(key, self.context.backup_dir)
                summary.backups.append(backup)
                self.registry.clear_children(key)
            except (PrintResetError, OSError) as e:
                logger.warning(f"Could not clear {key}: {e}")
                summary.add(ItemOutcome.failed(ItemKind.REGISTRY, key, e))
                continue
            logger.info(f"Cleared {key} (backup: {backup.file_path})")
            summary.add(ItemOutcome.ok(ItemKind.REGISTRY, key))

    # -- system phase ---------------------------------------------------

    def run_system_phase(self, summary: CleanupSummary) -> None:
        options = self.context.options
        settings = self.context.settings

        logger.info(f"Stopping the {settings.spooler_service} service")
        self.spooler.stop()

        logger.info(f"Purging spool queue in {self.context.spool_dir}")
        summary.extend(self.files.purge_spool(self.context.spool_dir))

        logger.info(f"Starting the {settings.spooler_service} service")
        self.spooler.start()
        self.sleep(settings.settle_delay)

        printers = self.printers.list_printers()
        logger.info(f"Found {len(printers)} printer(s)")

        if options.remove_all_printers:
            if not options.force and not self.confirm(
                f"Remove all {len(printers)} installed printer(s)?"
            ):
                raise ResetDeclined("Printer removal declined")
            self.remove_printers(printers, summary)

        snapshot = self.take_snapshot()
        logger.info(
            f"{len(snapshot.driver_names)} driver(s) and {len(snapshot.port_names)} port(s) in use"
        )

        self.remove_unused_drivers(snapshot, summary)
        self.remove_unused_ports(snapshot, summary)
        self.remove_unused_packages(snapshot, summary)

    def take_snapshot(self) -> InUseSnapshot:
        """Enumerate printers now and record which drivers and ports they use.

        The snapshot is not revalidated before each removal.
        """
        return InUseSnapshot.from_printers(self.printers.list_printers())

    def remove_printers(self, printers: List[Printer], summary: CleanupSummary) -> None:
        removed = 0
        for printer in printers:
            try:
                self.printers.remove_printer(printer.name)
            except CommandError as e:
                logger.warning(f"Could not remove printer {printer.name}: {e}")
                summary.add(ItemOutcome.failed(ItemKind.PRINTER, printer.name, e))
                continue
            logger.info(f"Removed printer {printer.name}")
            summary.add(ItemOutcome.ok(ItemKind.PRINTER, printer.name))
            removed += 1
        summary.removed_all_printers = removed == len(printers)

    def remove_unused_drivers(self, snapshot: InUseSnapshot, summary: CleanupSummary) -> None:
        try:
            drivers = self.printers.list_drivers()
        except CommandError as e:
            logger.warning(f"Could not enumerate printer drivers: {e}")
            return

        for driver in drivers:
            if snapshot.driver_in_use(driver.name):
                logger.debug(f"Keeping driver in use: {driver.name}")
                continue
            summary.add(self._remove_driver(driver))

    def _remove_driver(self, driver: PrinterDriver) -> ItemOutcome:
        """Remove a driver, retrying once with an explicit environment."""
        try:
            self.printers.remove_driver(driver.name)
        except CommandError as first:
            environment = driver.environment or self.context.settings.alternate_driver_environment
            logger.debug(f"Retrying {driver.name} with environment {environment}: {first}")
            try:
                self.printers.remove_driver(driver.name, environment)
            except CommandError as e:
                logger.warning(f"Could not remove driver {driver.name}: {e}")
                return ItemOutcome.failed(ItemKind.DRIVER, driver.name, e)
        logger.info(f"Removed driver {driver.name}")
        return ItemOutcome.ok(ItemKind.DRIVER, driver.name)

    def remove_unused_ports(self, snapshot: InUseSnapshot, summary: CleanupSummary) -> None:
        try:
            ports = self.printers.list_ports()
        except CommandError as e:
            logger.warning(f"Could not enumerate printer ports: {e}")
            return

        for port in ports:
            if not self.port_removable(port, snapshot):
                continue
            try:
                self.printers.remove_port(port.name)
            except CommandError as e:
                logger.warning(f"Could not remove port {port.name}: {e}")
                summary.add(ItemOutcome.failed(ItemKind.PORT, port.name, e))
                continue
            logger.info(f"Removed port {port.name}")
            summary.add(ItemOutcome.ok(ItemKind.PORT, port.name))

    @staticmethod
    def port_removable(port: PrinterPort, snapshot: InUseSnapshot) -> bool:
        return not (
            snapshot.port_in_use(port.name)
            or is_standard_port(port.name)
            or is_local_port(port)
        )

    def remove_unused_packages(self, snapshot: InUseSnapshot, summary: CleanupSummary) -> None:
        """Delete staged printer driver packages. Failures are expected and not reported."""
        try:
            packages = self.driver_store.list_printer_packages()
        except PrintResetError as e:
            logger.debug(f"Driver store enumeration skipped: {e}")
            return

        for package in packages:
            if snapshot.driver_in_use(package.identifier):
                continue
            try:
                self.driver_store.remove_package(package.identifier)
            except CommandError as e:
                logger.debug(f"Driver package {package.identifier} kept: {e}")
                summary.add(ItemOutcome.failed(ItemKind.PACKAGE, package.identifier, e))
                continue
            logger.info(f"Removed driver package {package.identifier}")
            summary.add(ItemOutcome.ok(ItemKind.PACKAGE, package.identifier))

    # -- summary --------------------------------------------------------

    def log_summary(self, summary: CleanupSummary) -> None:
        logger.info(f"Registry backups written: {len(summary.backups)}")
        if not summary.user_level_only:
            logger.info(f"Drivers removed: {summary.drivers_removed}")
            logger.info(f"Ports removed: {summary.ports_removed}")
            logger.info(f"All printers removed: {'yes' if summary.removed_all_printers else 'no'}")
        if summary.failures:
            logger.warning(f"{len(summary.failures)} item(s) could not be cleaned")
