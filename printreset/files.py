"""Filesystem purges: recent-item shortcuts, temp leftovers and the spool queue."""

import logging
import shutil
from pathlib import Path
from typing import Iterable, List

from printreset.models import ItemKind, ItemOutcome

logger = logging.getLogger(__name__)


def matches(name: str, pattern: str) -> bool:
    """Case-insensitive substring match used for recent and temp items."""
    return pattern.lower() in name.lower()


def _delete(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


class FileCleaner:
    """Deletes printer-related files. Every deletion is best-effort per item."""

    def purge_recent(self, recent_dir: Path, pattern: str) -> List[ItemOutcome]:
        """Delete .lnk shortcuts in Recent Items whose name matches `pattern`."""
        try:
            if not recent_dir.is_dir():
                logger.debug(f"Recent items folder not found: {recent_dir}")
                return []
            targets = [
                p for p in recent_dir.iterdir()
                if p.suffix.lower() == ".lnk" and matches(p.name, pattern)
            ]
        except OSError as e:
            return [self._unreadable(recent_dir, ItemKind.RECENT, e)]
        return self._delete_all(targets, ItemKind.RECENT)

    def purge_temp(self, temp_dirs: Iterable[Path], pattern: str) -> List[ItemOutcome]:
        """Delete files and folders matching `pattern` at the top of each temp folder."""
        outcomes: List[ItemOutcome] = []
        for temp_dir in temp_dirs:
            try:
                if not temp_dir.is_dir():
                    logger.debug(f"Temp folder not found: {temp_dir}")
                    continue
                targets = [p for p in temp_dir.iterdir() if matches(p.name, pattern)]
            except OSError as e:
                outcomes.append(self._unreadable(temp_dir, ItemKind.TEMP, e))
                continue
            outcomes.extend(self._delete_all(targets, ItemKind.TEMP))
        return outcomes

    def purge_spool(self, spool_dir: Path) -> List[ItemOutcome]:
        """Delete every queued file in the spooler directory."""
        try:
            if not spool_dir.is_dir():
                logger.warning(f"Spool folder not found: {spool_dir}")
                return []
            targets = [p for p in spool_dir.iterdir() if p.is_file()]
        except OSError as e:
            return [self._unreadable(spool_dir, ItemKind.SPOOL, e)]
        return self._delete_all(targets, ItemKind.SPOOL)

    @staticmethod
    def _unreadable(folder: Path, kind: ItemKind, error: OSError) -> ItemOutcome:
        logger.warning(f"Could not list {folder}: {error}")
        return ItemOutcome.failed(kind, str(folder), error)

    def _delete_all(self, paths: List[Path], kind: ItemKind) -> List[ItemOutcome]:
        outcomes = []
        for path in paths:
            try:
                _delete(path)
                outcomes.append(ItemOutcome.ok(kind, str(path)))
            except OSError as e:
                logger.warning(f"Could not delete {path}: {e}")
                outcomes.append(ItemOutcome.failed(kind, str(path), e))
        return outcomes
