"""Record store for quarantined items.

This module provides the RecordStore class, the single source of truth
for what is recoverable. The store is a CSV table: one header line
followed by one line per record.
"""

import csv
import fcntl
import io
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from tempfile import NamedTemporaryFile

from recyclebin.core.errors import AmbiguousNameError, RecordStoreError
from recyclebin.core.paths import get_metadata_path
from recyclebin.models.record import STORE_HEADER, Record

logger = logging.getLogger(__name__)


class RecordStore:
    """Manages quarantine records in a CSV file.

    Storage location: <root>/metadata.db

    Every mutation holds an advisory lock on a sidecar ``.lock`` file.
    The lock is reentrant within one RecordStore instance, so engines can
    hold it around a whole item operation while the store methods they
    call take it again. Rewrites go through a temporary file and
    os.replace, so each rewrite is atomic.

    Attributes:
        path: Path of the store file.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize RecordStore.

        Args:
            path: Optional override for the store file.
                  Default: ~/.recycle_bin/metadata.db
        """
        self.path = path if path is not None else get_metadata_path()
        self._lock_depth = 0
        self._lock_file: io.TextIOWrapper | None = None

    @property
    def lock_path(self) -> Path:
        """Path of the advisory lock file."""
        return self.path.with_name(self.path.name + ".lock")

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Hold the exclusive advisory lock for the duration of the block.

        Raises:
            RecordStoreError: If the lock file cannot be opened.
        """
        if self._lock_depth == 0:
            try:
                self._lock_file = self.lock_path.open("a", encoding="utf-8")
                fcntl.flock(self._lock_file.fileno(), fcntl.LOCK_EX)
            except OSError as e:
                if self._lock_file is not None:
                    self._lock_file.close()
                    self._lock_file = None
                raise RecordStoreError(f"Cannot lock record store {self.path}: {e}") from e
        self._lock_depth += 1
        try:
            yield
        finally:
            self._lock_depth -= 1
            if self._lock_depth == 0 and self._lock_file is not None:
                fcntl.flock(self._lock_file.fileno(), fcntl.LOCK_UN)
                self._lock_file.close()
                self._lock_file = None

    def initialize(self) -> bool:
        """Create the store with its header line if it doesn't exist.

        Returns:
            True if the file was created, False if it already existed.

        Raises:
            RecordStoreError: If the file cannot be written.
        """
        if self.path.exists():
            return False
        self._rewrite([])
        logger.info("Created record store %s", self.path)
        return True

    def append(self, record: Record) -> None:
        """Append one record to the store.

        Writes the header first if the file is missing or empty.

        Args:
            record: The record to persist.

        Raises:
            RecordStoreError: If the store cannot be written.
        """
        with self.lock():
            try:
                needs_header = not self.path.exists() or self.path.stat().st_size == 0
                with self.path.open(mode="a", encoding="utf-8", newline="") as f:
                    writer = csv.writer(f, lineterminator="\n")
                    if needs_header:
                        writer.writerow(STORE_HEADER)
                    writer.writerow(record.to_row())
                    f.flush()
            except OSError as e:
                raise RecordStoreError(f"Cannot write record store {self.path}: {e}") from e
        logger.debug("Appended record %s", record.id)

    def scan_all(self) -> Iterator[Record]:
        """Iterate over all records.

        The file is re-read on every call. Corrupt rows are skipped with
        a warning. A missing store yields nothing.

        Yields:
            Records in file order.

        Raises:
            RecordStoreError: If the store exists but cannot be read.
        """
        if not self.path.exists():
            return

        try:
            with self.path.open(encoding="utf-8", newline="") as f:
                reader = csv.reader(f)
                for row in reader:
                    if not row or reader.line_num == 1 and tuple(row) == STORE_HEADER:
                        continue
                    try:
                        yield Record.from_row(row)
                    except ValueError as e:
                        logger.warning(
                            "Skipping corrupt record line %d: %s",
                            reader.line_num,
                            str(e),
                        )
        except (OSError, csv.Error) as e:
            raise RecordStoreError(f"Cannot read record store {self.path}: {e}") from e

    def find_by_id(self, record_id: str) -> Record | None:
        """Find the first record with the given id.

        Args:
            record_id: The id to look for.

        Returns:
            Record if found, None otherwise.
        """
        for record in self.scan_all():
            if record.id == record_id:
                return record
        return None

    def find_all_by_name(self, name: str) -> list[Record]:
        """Find all records whose original name matches, ignoring case.

        Args:
            name: Base name to match exactly (case-insensitive).

        Returns:
            Matching records in file order.
        """
        wanted = name.casefold()
        return [r for r in self.scan_all() if r.original_name.casefold() == wanted]

    def find_by_name(self, name: str) -> Record | None:
        """Find the single record whose original name matches.

        Args:
            name: Base name to match exactly (case-insensitive).

        Returns:
            Record if exactly one matches, None if none does.

        Raises:
            AmbiguousNameError: If more than one record matches.
        """
        matches = self.find_all_by_name(name)
        if len(matches) > 1:
            raise AmbiguousNameError(name, [r.id for r in matches])
        return matches[0] if matches else None

    def resolve(self, key: str) -> Record | None:
        """Look up a record by id first, then by name.

        Args:
            key: Record id or original name.

        Returns:
            Record if found, None otherwise.

        Raises:
            AmbiguousNameError: If the key is not an id and names several records.
        """
        record = self.find_by_id(key)
        if record is not None:
            return record
        return self.find_by_name(key)

    def contains(self, record_id: str) -> bool:
        """Check whether a record with this id is live."""
        return self.find_by_id(record_id) is not None

    def remove(self, record_id: str) -> bool:
        """Remove every row with the given id.

        Args:
            record_id: Id of the record(s) to drop.

        Returns:
            True if at least one row was removed, False otherwise.

        Raises:
            RecordStoreError: If the store cannot be rewritten. The file
                keeps its previous content in that case.
        """
        with self.lock():
            records = list(self.scan_all())
            kept = [r for r in records if r.id != record_id]
            if len(kept) == len(records):
                return False
            self._rewrite(kept)
        logger.debug("Removed record %s", record_id)
        return True

    def reset(self) -> None:
        """Truncate the store to its header line.

        Raises:
            RecordStoreError: If the store cannot be rewritten.
        """
        with self.lock():
            self._rewrite([])
        logger.info("Reset record store %s", self.path)

    def _rewrite(self, records: list[Record]) -> None:
        """Replace the store content atomically.

        Writes to a temporary file in the same directory and renames it
        over the original. The temporary file is cleaned up on failure.

        Args:
            records: Records to keep, in order.

        Raises:
            RecordStoreError: If the file cannot be written.
        """
        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                newline="",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                writer = csv.writer(f, lineterminator="\n")
                writer.writerow(STORE_HEADER)
                writer.writerows(record.to_row() for record in records)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise RecordStoreError(f"Cannot rewrite record store {self.path}: {e}") from e
