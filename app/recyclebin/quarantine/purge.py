"""Purge engine: permanently erases quarantined items.

There is no undo once a payload is removed.
"""

import logging
import shutil
from pathlib import Path

from recyclebin.core.errors import (
    ConfirmationRequiredError,
    NotFoundError,
    RecycleBinError,
    from_os_error,
)
from recyclebin.core.paths import get_files_dir, get_root_dir
from recyclebin.core.store import RecordStore
from recyclebin.models.record import Record
from recyclebin.models.results import PurgeAllResult, PurgeResult
from recyclebin.quarantine.walk import is_real_dir, lexists

logger = logging.getLogger(__name__)


class PurgeEngine:
    """Empties the recycle bin, wholesale or item by item.

    Attributes:
        _store: Record store to prune.
        _root: Quarantine root directory.
    """

    def __init__(self, store: RecordStore, root: Path | None = None) -> None:
        """Initialize the PurgeEngine.

        Args:
            store: Record store to prune.
            root: Quarantine root. Default: ~/.recycle_bin
        """
        self._store = store
        self._root = root if root is not None else get_root_dir()
        self._files_dir = get_files_dir(self._root)

    def purge_all(self, confirmed: bool = False) -> PurgeAllResult:
        """Erase every payload and reset the record store.

        Args:
            confirmed: Must be True; the caller is responsible for asking
                the user or for an explicit non-interactive flag.

        Returns:
            PurgeAllResult summarizing what was erased.

        Raises:
            ConfirmationRequiredError: If confirmed is False.
            RecycleBinError: If a payload or the store cannot be removed.
                Records whose payload was erased before the failure are
                dropped; the rest stay restorable.
        """
        if not confirmed:
            raise ConfirmationRequiredError("Emptying the recycle bin requires confirmation")

        with self._store.lock():
            records = list(self._store.scan_all())
            payloads_removed = 0
            if self._files_dir.exists():
                for entry in sorted(self._files_dir.iterdir()):
                    try:
                        self._erase(entry)
                    except OSError as e:
                        self._drop_erased(records)
                        raise from_os_error(e, f"Cannot erase {entry}") from e
                    payloads_removed += 1
            self._store.reset()

        bytes_freed = sum(r.size_bytes for r in records if not r.is_directory)
        logger.info(
            "Emptied recycle bin: %d record(s), %d payload(s), %d bytes",
            len(records),
            payloads_removed,
            bytes_freed,
        )
        return PurgeAllResult(
            records_removed=len(records),
            payloads_removed=payloads_removed,
            bytes_freed=bytes_freed,
        )

    def purge_selected(self, keys: list[str]) -> list[PurgeResult]:
        """Erase the items matching each key, independently.

        Keys resolve by id first, then by name. A key matching nothing
        is reported and processing continues with the next key.

        Args:
            keys: Record ids or original names.

        Returns:
            List of PurgeResult, one per key, in input order.
        """
        return [self._purge_single(key) for key in keys]

    def _purge_single(self, key: str) -> PurgeResult:
        """Erase one item, turning errors into a failed result."""
        record: Record | None = None
        try:
            with self._store.lock():
                record = self._store.resolve(key)
                if record is None:
                    raise NotFoundError(f"No recycled item matches '{key}'")

                payload = record.payload_path(self._files_dir)
                payload_missing = not lexists(payload)
                if payload_missing:
                    logger.warning("Payload for %s is already missing: %s", record.id, payload)
                else:
                    try:
                        self._erase(payload)
                    except OSError as e:
                        raise from_os_error(e, f"Cannot erase {payload}") from e

                self._store.remove(record.id)
        except RecycleBinError as e:
            logger.warning("Cannot purge %s: %s (%s)", key, e, e.kind)
            return PurgeResult(
                key=key,
                success=False,
                record=record,
                error=str(e),
                error_kind=e.kind,
            )

        logger.info("Purged %s (%s)", record.id, record.original_path)
        return PurgeResult(key=key, success=True, record=record, payload_missing=payload_missing)

    def _drop_erased(self, records: list[Record]) -> None:
        """Remove the records whose payload is already gone after an aborted wipe."""
        for record in records:
            if not lexists(record.payload_path(self._files_dir)):
                self._store.remove(record.id)
                logger.debug("Dropped record %s after erasing its payload", record.id)

    def _erase(self, path: Path) -> None:
        """Permanently remove a file, link or directory tree."""
        if is_real_dir(path):
            shutil.rmtree(path)
        else:
            path.unlink()
