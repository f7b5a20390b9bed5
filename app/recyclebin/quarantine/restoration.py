"""Restoration engine: moves quarantined payloads back.

A restore looks the record up by id or name, guards against restoring
into the quarantine root, places the payload (merging directories and
resolving conflicts on occupied destinations) and re-applies the recorded
permissions. The record is dropped just before the payload moves and is
appended again if the move fails. Any error or a cancelled conflict
leaves record and payload untouched, so retrying is safe.
"""

import logging
import os
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from recyclebin.core.errors import (
    InsufficientSpaceError,
    MissingPayloadError,
    MoveError,
    NotFoundError,
    PermissionDeniedError,
    RecycleBinError,
    SelfRestoreError,
    from_os_error,
)
from recyclebin.core.paths import get_files_dir, get_root_dir
from recyclebin.core.store import RecordStore
from recyclebin.models.record import Record
from recyclebin.models.results import ConflictChoice, RestoreOutcome, RestoreResult
from recyclebin.quarantine.walk import compute_size, free_space, is_real_dir, lexists

logger = logging.getLogger(__name__)

ConflictResolver = Callable[[Record, Path], ConflictChoice]

RENAME_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def fixed_choice(choice: ConflictChoice) -> ConflictResolver:
    """Build a resolver that always answers with the same choice."""

    def resolve(record: Record, destination: Path) -> ConflictChoice:
        return choice

    return resolve


def renamed_destination(destination: Path, now: datetime | None = None) -> Path:
    """Compute a free, timestamped sibling of an occupied destination.

    ``/tmp/a.txt`` becomes ``/tmp/a_20240610_153000.txt``; if that is
    taken too, a counter is appended to the stem.

    Args:
        destination: The occupied path.
        now: Timestamp to embed. Default: current local time.

    Returns:
        A path that does not exist yet.
    """
    stamp = (now or datetime.now()).strftime(RENAME_TIMESTAMP_FORMAT)
    stem, suffix = destination.stem, destination.suffix
    candidate = destination.with_name(f"{stem}_{stamp}{suffix}")
    counter = 1
    while lexists(candidate):
        candidate = destination.with_name(f"{stem}_{stamp}_{counter}{suffix}")
        counter += 1
    return candidate


class RestorationEngine:
    """Restores quarantined items to their original locations.

    Attributes:
        _store: Record store to read and prune.
        _root: Quarantine root directory.
        _resolver: Called when a destination is occupied. Default: cancel.
    """

    def __init__(
        self,
        store: RecordStore,
        root: Path | None = None,
        resolver: ConflictResolver | None = None,
    ) -> None:
        """Initialize the RestorationEngine.

        Args:
            store: Record store to read and prune.
            root: Quarantine root. Default: ~/.recycle_bin
            resolver: Conflict resolver. Default: always cancel.
        """
        self._store = store
        self._root = root if root is not None else get_root_dir()
        self._files_dir = get_files_dir(self._root)
        self._resolver = resolver or fixed_choice(ConflictChoice.CANCEL)

    def restore_many(self, keys: list[str]) -> list[RestoreResult]:
        """Restore several keys independently, in order."""
        return [self.restore(key) for key in keys]

    def restore(self, key: str) -> RestoreResult:
        """Restore the item identified by an id or an original name.

        Args:
            key: Record id, or original name (case-insensitive).

        Returns:
            RestoreResult describing the terminal outcome. Errors are
            reported with outcome FAILED and never raised.
        """
        record: Record | None = None
        try:
            with self._store.lock():
                try:
                    record = self._lookup(key)
                    return self._restore_record(key, record)
                except OSError as e:
                    raise from_os_error(e, f"Cannot restore '{key}'") from e
        except RecycleBinError as e:
            logger.warning("Cannot restore %s: %s (%s)", key, e, e.kind)
            return RestoreResult(
                key=key,
                outcome=RestoreOutcome.FAILED,
                record=record,
                error=str(e),
                error_kind=e.kind,
            )

    def _lookup(self, key: str) -> Record:
        """Resolve a key by id first, then by name.

        Raises:
            NotFoundError: If nothing matches.
            AmbiguousNameError: If the name matches several records.
        """
        record = self._store.resolve(key)
        if record is None:
            raise NotFoundError(f"No recycled item matches '{key}'")
        return record

    def _restore_record(self, key: str, record: Record) -> RestoreResult:
        """Run the restore state machine for a resolved record."""
        destination = Path(record.original_path)
        root = self._root.resolve()
        parent = destination.parent.resolve()
        if parent == root or root in parent.parents or (parent / destination.name) == root:
            raise SelfRestoreError(
                f"Refusing to restore {record.id} into the recycle bin: {destination}"
            )

        payload = record.payload_path(self._files_dir)
        if not lexists(payload):
            raise MissingPayloadError(
                f"Payload for {record.id} ({record.original_name}) is missing: {payload}"
            )

        self._check_space(payload, destination)

        if record.is_directory and is_real_dir(destination):
            outcome = RestoreOutcome.MERGED
        else:
            self._ensure_parent(destination)
            outcome = RestoreOutcome.SUCCESS
            if lexists(destination):
                choice = self._resolver(record, destination)
                logger.debug("Conflict on %s resolved as %s", destination, choice.value)
                if choice == ConflictChoice.CANCEL:
                    return RestoreResult(
                        key=key,
                        outcome=RestoreOutcome.CANCELLED,
                        record=record,
                    )
                if choice == ConflictChoice.OVERWRITE:
                    outcome = RestoreOutcome.OVERWRITE
                else:
                    destination = renamed_destination(destination)
                    outcome = RestoreOutcome.RENAMED

        # Drop the record before touching the payload; a failed placement puts it back.
        if not self._store.remove(record.id):
            logger.warning("Record %s was already gone before restoring it", record.id)
        try:
            self._place(payload, destination, outcome)
        except (RecycleBinError, OSError):
            self._store.append(record)
            raise

        message = self._apply_permissions(record, destination)
        logger.info("Restored %s to %s (%s)", record.id, destination, outcome.value)
        return RestoreResult(
            key=key,
            outcome=outcome,
            record=record,
            destination=str(destination),
            message=message,
        )

    def _check_space(self, payload: Path, destination: Path) -> None:
        """Check that the destination volume can hold the payload.

        Raises:
            InsufficientSpaceError: If free space is smaller than the payload.
        """
        required = compute_size(payload)
        available = free_space(destination.parent)
        if available < required:
            raise InsufficientSpaceError(
                f"Not enough space to restore {destination}: "
                f"need {required} bytes, {available} free"
            )

    def _ensure_parent(self, destination: Path) -> None:
        """Create the destination's parent directory if missing.

        Raises:
            PermissionDeniedError: If the directory cannot be created.
        """
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PermissionDeniedError(
                f"Cannot create parent directory {destination.parent}: {e}"
            ) from e

    def _place(self, payload: Path, destination: Path, outcome: RestoreOutcome) -> None:
        """Put the payload at its destination according to the chosen outcome."""
        if outcome == RestoreOutcome.MERGED:
            self._merge(payload, destination)
            shutil.rmtree(payload)
            return
        if outcome == RestoreOutcome.OVERWRITE:
            self._remove(destination)
        self._move(payload, destination)

    def _merge(self, source: Path, target: Path) -> None:
        """Layer the contents of source onto an existing directory.

        Subdirectories present on both sides are merged recursively;
        anything else already at the target is replaced by the source.
        """
        for entry in sorted(source.iterdir()):
            counterpart = target / entry.name
            if is_real_dir(entry) and is_real_dir(counterpart):
                self._merge(entry, counterpart)
                continue
            if lexists(counterpart):
                self._remove(counterpart)
            self._move(entry, counterpart)

    def _remove(self, path: Path) -> None:
        """Remove whatever occupies path (directory tree, file or link)."""
        if is_real_dir(path):
            shutil.rmtree(path)
        else:
            path.unlink()

    def _move(self, source: Path, target: Path) -> None:
        """Relocate a payload entry.

        Raises:
            MoveError: If the move fails.
        """
        try:
            shutil.move(str(source), str(target))
        except (OSError, shutil.Error) as e:
            raise MoveError(f"Failed to move {source} to {target}: {e}") from e

    def _apply_permissions(self, record: Record, destination: Path) -> str | None:
        """Re-apply the recorded mode to the restored path.

        Symlinks are left alone since chmod would change their target.

        Returns:
            A message if the mode could not be applied, None otherwise.
        """
        if destination.is_symlink():
            return None
        try:
            os.chmod(destination, record.mode)
        except OSError as e:
            logger.warning("Cannot restore permissions on %s: %s", destination, e)
            return f"Permissions not restored: {e}"
        return None
