"""Consistency checks between the record store and the payload tree."""

import logging
from dataclasses import dataclass
from pathlib import Path

from recyclebin.core.paths import get_files_dir, get_root_dir
from recyclebin.core.store import RecordStore
from recyclebin.models.record import Record
from recyclebin.quarantine.walk import lexists

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OrphanReport:
    """Inconsistencies found between records and payloads.

    Attributes:
        missing_payloads: Records whose payload no longer exists.
        stray_payloads: Payload entries no record refers to.
    """

    missing_payloads: tuple[Record, ...]
    stray_payloads: tuple[Path, ...]

    @property
    def clean(self) -> bool:
        """Check if no inconsistency was found."""
        return not self.missing_payloads and not self.stray_payloads


def find_orphans(store: RecordStore, root: Path | None = None) -> OrphanReport:
    """Compare the record store against the payload directory.

    Args:
        store: Record store to check.
        root: Quarantine root. Default: ~/.recycle_bin

    Returns:
        OrphanReport listing both kinds of orphan.
    """
    files_dir = get_files_dir(root or get_root_dir())
    records = list(store.scan_all())

    missing = tuple(r for r in records if not lexists(r.payload_path(files_dir)))
    known = {r.payload_name for r in records}
    stray: tuple[Path, ...] = ()
    if files_dir.exists():
        stray = tuple(p for p in sorted(files_dir.iterdir()) if p.name not in known)

    return OrphanReport(missing_payloads=missing, stray_payloads=stray)


def drop_missing_payload_records(store: RecordStore, report: OrphanReport) -> int:
    """Remove the records whose payload is gone.

    Stray payloads are left alone; nothing says where they belong.

    Returns:
        Number of records removed.
    """
    removed = 0
    with store.lock():
        for record in report.missing_payloads:
            if store.remove(record.id):
                logger.info("Dropped record %s with missing payload", record.id)
                removed += 1
    return removed
