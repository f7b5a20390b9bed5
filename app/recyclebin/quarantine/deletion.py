"""Deletion engine: moves paths into quarantine.

Each input path is validated, relocated under the quarantine files
directory and described by a record. Directories fan out: every
descendant gets its own record and payload, then the emptied directory
shell is quarantined under its own id.
"""

import logging
import os
import shutil
from datetime import UTC, datetime
from pathlib import Path

from recyclebin.core import permissions
from recyclebin.core.config import RecycleBinConfig
from recyclebin.core.errors import (
    InsufficientSpaceError,
    MoveError,
    NotFoundError,
    PermissionDeniedError,
    RecycleBinError,
    SelfRecycleError,
    from_os_error,
)
from recyclebin.core.ids import new_unique_id
from recyclebin.core.paths import get_files_dir, get_root_dir
from recyclebin.core.store import RecordStore
from recyclebin.models.record import Record, kind_for
from recyclebin.models.results import DeletionResult
from recyclebin.quarantine.walk import (
    free_space,
    is_real_dir,
    iter_post_order,
    lexists,
    original_location,
    owner_name,
)

logger = logging.getLogger(__name__)


class DeletionEngine:
    """Recycles files and directories into the quarantine store.

    Paths are processed strictly in the order given; a failure on one
    path never stops the others. Records are appended only after the
    payload has been moved, so a failed move leaves no orphan record.

    Attributes:
        _store: Record store receiving one record per quarantined object.
        _root: Quarantine root directory.
        _config: Settings providing the optional quarantine quota.
    """

    def __init__(
        self,
        store: RecordStore,
        root: Path | None = None,
        config: RecycleBinConfig | None = None,
    ) -> None:
        """Initialize the DeletionEngine.

        Args:
            store: Record store to write to.
            root: Quarantine root. Default: ~/.recycle_bin
            config: Settings. Default: RecycleBinConfig defaults.
        """
        self._store = store
        self._root = root if root is not None else get_root_dir()
        self._files_dir = get_files_dir(self._root)
        self._config = config if config is not None else RecycleBinConfig()

    def delete(self, paths: list[str]) -> list[DeletionResult]:
        """Recycle multiple paths and return one result per path.

        Args:
            paths: Paths to recycle, absolute or relative to the cwd.

        Returns:
            List of DeletionResult, one per input path, in input order.
        """
        return [self._delete_single(path) for path in paths]

    def _delete_single(self, path_str: str) -> DeletionResult:
        """Recycle one input path, turning errors into a failed result."""
        path = Path(path_str)
        written: list[Record] = []
        try:
            with self._store.lock():
                try:
                    self._validate(path)
                    if is_real_dir(path):
                        self._recycle_directory(path, written)
                    else:
                        written.append(self._quarantine(path, path.lstat().st_size))
                except OSError as e:
                    raise from_os_error(e, f"Cannot recycle {path}") from e
        except RecycleBinError as e:
            logger.warning("Cannot recycle %s: %s (%s)", path_str, e, e.kind)
            return DeletionResult(
                path=path_str,
                success=False,
                records=tuple(written),
                error=str(e),
                error_kind=e.kind,
            )

        return DeletionResult(path=path_str, success=True, records=tuple(written))

    def _validate(self, path: Path) -> None:
        """Run the pre-move checks for a top-level path.

        Raises:
            SelfRecycleError: If path is inside (or contains) the quarantine root.
            NotFoundError: If nothing exists at path.
            PermissionDeniedError: If path is not readable and writable.
            InsufficientSpaceError: If the volume or the quota lacks room.
        """
        location = original_location(path)
        root = self._root.resolve()
        if location == root or root in location.parents or location in root.parents:
            msg = f"Cannot recycle {path}: it is or contains the recycle bin {self._root}"
            raise SelfRecycleError(msg)

        self._check_access(path)

        size = self._total_size(path)
        available = free_space(self._files_dir)
        if available < size:
            msg = f"Not enough space to recycle {path}: need {size} bytes, {available} free"
            raise InsufficientSpaceError(msg)

        quota = self._config.max_size_bytes
        if quota is not None:
            used = sum(r.size_bytes for r in self._store.scan_all() if not r.is_directory)
            if used + size > quota:
                msg = (
                    f"Recycling {path} ({size} bytes) would exceed the recycle bin quota "
                    f"of {self._config.max_size_mb} MB ({used} bytes in use)"
                )
                raise InsufficientSpaceError(msg)

    def _check_access(self, path: Path) -> None:
        """Check that path exists and is readable and writable.

        Raises:
            NotFoundError: If nothing exists at path.
            PermissionDeniedError: If access is insufficient.
        """
        if not lexists(path):
            raise NotFoundError(f"Path does not exist: {path}")
        if not os.access(path, os.R_OK | os.W_OK, follow_symlinks=False):
            raise PermissionDeniedError(f"No read/write permission on {path}")

    def _total_size(self, path: Path) -> int:
        """Size of a file, or aggregate size of a directory tree."""
        if not is_real_dir(path):
            return path.lstat().st_size
        return self._subtree_sizes(path).get(path, 0)

    def _subtree_sizes(self, root: Path) -> dict[Path, int]:
        """Aggregate sizes for root and every directory below it.

        Uses a single post-order pass: each entry's size is added to its
        parent's total before the parent itself is visited.
        """
        sizes: dict[Path, int] = {root: 0}
        for child in iter_post_order(root):
            if is_real_dir(child):
                size = sizes.setdefault(child, 0)
            else:
                size = child.lstat().st_size
            sizes[child.parent] = sizes.get(child.parent, 0) + size
        return sizes

    def _recycle_directory(self, directory: Path, written: list[Record]) -> None:
        """Fan a directory out into per-object records, then recycle its shell.

        Args:
            directory: Directory to recycle.
            written: Receives every record appended, descendants first.

        Raises:
            MoveError: If any descendant could not be recycled; the
                directory itself then stays in place.
        """
        sizes = self._subtree_sizes(directory)
        plan = list(iter_post_order(directory))
        failures: list[tuple[Path, RecycleBinError]] = []

        for child in plan:
            try:
                self._check_access(child)
                if is_real_dir(child) and any(child.iterdir()):
                    raise MoveError(f"Directory not empty after recycling its contents: {child}")
                size = sizes.get(child, 0) if is_real_dir(child) else child.lstat().st_size
                written.append(self._quarantine(child, size))
            except OSError as e:
                error = from_os_error(e, f"Cannot recycle {child}")
                logger.warning("Cannot recycle %s: %s (%s)", child, error, error.kind)
                failures.append((child, error))
            except RecycleBinError as e:
                logger.warning("Cannot recycle %s: %s (%s)", child, e, e.kind)
                failures.append((child, e))

        if failures:
            first_path, first_error = failures[0]
            msg = (
                f"{len(failures)} item(s) inside {directory} could not be recycled; "
                f"directory left in place (first: {first_path}: {first_error})"
            )
            raise MoveError(msg)

        written.append(self._quarantine(directory, sizes.get(directory, 0)))

    def _quarantine(self, path: Path, size: int) -> Record:
        """Move one filesystem object into quarantine and record it.

        Directories must already be empty when they get here.

        Args:
            path: File, symlink or empty directory to relocate.
            size: Size to record (aggregate for directories).

        Returns:
            The appended record.

        Raises:
            MoveError: If the relocation fails.
        """
        st = path.lstat()
        is_dir = is_real_dir(path)
        try:
            record_id = new_unique_id(self._is_taken)
        except RuntimeError as e:
            raise MoveError(f"Cannot recycle {path}: {e}") from e
        record = Record(
            id=record_id,
            original_name=path.name,
            original_path=str(original_location(path)),
            deletion_timestamp=datetime.now(UTC).replace(microsecond=0),
            size_bytes=size,
            kind=kind_for(path, is_dir),
            permissions=permissions.encode(st.st_mode),
            owner=owner_name(path),
        )

        payload = record.payload_path(self._files_dir)
        try:
            self._files_dir.mkdir(parents=True, exist_ok=True)
            shutil.move(str(path), str(payload))
        except (OSError, shutil.Error) as e:
            raise MoveError(f"Failed to move {path} into quarantine: {e}") from e

        self._store.append(record)
        logger.info("Recycled %s as %s", record.original_path, record.id)
        return record

    def _is_taken(self, record_id: str) -> bool:
        """Check whether an id is live in the store or used by a stray payload."""
        if self._store.contains(record_id):
            return True
        return any(self._files_dir.glob(f"{record_id}*"))
