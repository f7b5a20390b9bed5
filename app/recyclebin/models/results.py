"""Result models for quarantine operations.

Engines never raise for per-item failures; they return these immutable
results instead, carrying the error message and its kind.
"""

from dataclasses import dataclass
from enum import Enum

from recyclebin.models.record import Record


class ConflictChoice(str, Enum):
    """How to resolve a restore onto an occupied destination.

    Attributes:
        OVERWRITE: Replace the existing destination with the payload.
        RENAME: Restore next to it under a timestamped name.
        CANCEL: Leave everything as it is.
    """

    OVERWRITE = "overwrite"
    RENAME = "rename"
    CANCEL = "cancel"


class RestoreOutcome(str, Enum):
    """Terminal outcome of a restoration.

    Attributes:
        SUCCESS: Payload moved to its original location.
        MERGED: Directory payload layered onto an existing directory.
        OVERWRITE: Existing destination replaced.
        RENAMED: Restored under a disambiguated name.
        CANCELLED: Conflict resolution chose to cancel. Not an error.
        FAILED: An error stopped the restoration; see error_kind.
    """

    SUCCESS = "success"
    MERGED = "merged"
    OVERWRITE = "overwrite"
    RENAMED = "renamed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of recycling one input path.

    Attributes:
        path: The path as given by the caller.
        success: Whether the path ended up fully quarantined.
        records: Records written for this path, descendants first.
        error: Error message if the operation failed, None otherwise.
        error_kind: Error class name if the operation failed.
    """

    path: str
    success: bool
    records: tuple[Record, ...] = ()
    error: str | None = None
    error_kind: str | None = None

    @property
    def failed(self) -> bool:
        """Check if recycling failed."""
        return not self.success


@dataclass(frozen=True, slots=True)
class RestoreResult:
    """Result of restoring one key.

    Attributes:
        key: The id or name the caller asked for.
        outcome: Terminal outcome.
        record: The resolved record, None if lookup failed.
        destination: Where the payload was placed, None if it was not.
        error: Error message for FAILED outcomes.
        error_kind: Error class name for FAILED outcomes.
        message: Additional non-fatal information (e.g. chmod failures).
    """

    key: str
    outcome: RestoreOutcome
    record: Record | None = None
    destination: str | None = None
    error: str | None = None
    error_kind: str | None = None
    message: str | None = None

    @property
    def success(self) -> bool:
        """Check if the payload was placed back on disk."""
        return self.outcome not in (RestoreOutcome.CANCELLED, RestoreOutcome.FAILED)

    @property
    def failed(self) -> bool:
        """Check if the restoration ended in an error."""
        return self.outcome == RestoreOutcome.FAILED


@dataclass(frozen=True, slots=True)
class PurgeResult:
    """Result of permanently erasing one key.

    Attributes:
        key: The id or name the caller asked for.
        success: Whether the record is gone.
        record: The resolved record, None if lookup failed.
        payload_missing: True if the record had no payload to remove.
        error: Error message if the operation failed.
        error_kind: Error class name if the operation failed.
    """

    key: str
    success: bool
    record: Record | None = None
    payload_missing: bool = False
    error: str | None = None
    error_kind: str | None = None


@dataclass(frozen=True, slots=True)
class PurgeAllResult:
    """Summary of a full wipe.

    Attributes:
        records_removed: Number of records dropped from the store.
        payloads_removed: Number of top-level payload entries erased.
        bytes_freed: Sum of the dropped records' sizes.
    """

    records_removed: int
    payloads_removed: int
    bytes_freed: int
