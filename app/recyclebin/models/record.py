"""Record model for quarantined items.

A Record is one row of the record store: everything needed to put a
quarantined file or directory back where it came from.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from recyclebin.core import permissions

# Kind markers. Any other kind value is a file extension.
KIND_DIRECTORY = "DIRECTORY"
KIND_FILE = "FILE"
KIND_MARKERS = frozenset({KIND_DIRECTORY, KIND_FILE})

# Column order of the persisted table
STORE_HEADER: tuple[str, ...] = (
    "ID",
    "ORIGINAL_NAME",
    "ORIGINAL_PATH",
    "DELETION_DATE",
    "FILE_SIZE",
    "FILE_TYPE",
    "PERMISSIONS",
    "OWNER",
)


def kind_for(path: Path, is_dir: bool) -> str:
    """Derive the record kind for a filesystem object.

    Directories get the DIRECTORY marker. Files get their last
    extension without the dot; files without one (or whose extension
    collides with a marker) get the FILE marker.

    Args:
        path: Path of the object being quarantined.
        is_dir: Whether the object is a real directory.

    Returns:
        Kind string for the record.
    """
    if is_dir:
        return KIND_DIRECTORY
    extension = path.suffix[1:]
    if not extension or extension in KIND_MARKERS:
        return KIND_FILE
    return extension


@dataclass(frozen=True, slots=True)
class Record:
    """Metadata describing one quarantined item.

    Records are immutable once written; they are only created and
    dropped, never updated.

    Attributes:
        id: Unique key, also the payload file stem.
        original_name: Base name at time of deletion.
        original_path: Absolute restore destination.
        deletion_timestamp: When the item was recycled (timezone-aware).
        size_bytes: Size at deletion (aggregate for directories).
        kind: DIRECTORY, FILE, or the file extension.
        permissions: Ten-character symbolic mode, e.g. ``-rw-r--r--``.
        owner: Owner name at deletion. Informational only.
    """

    id: str
    original_name: str
    original_path: str
    deletion_timestamp: datetime
    size_bytes: int
    kind: str
    permissions: str
    owner: str

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.id:
            msg = "Record id cannot be empty"
            raise ValueError(msg)
        if not self.original_name:
            msg = "Original name cannot be empty"
            raise ValueError(msg)
        if not Path(self.original_path).is_absolute():
            msg = f"Original path must be absolute, got {self.original_path!r}"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)
        if not self.kind:
            msg = "Kind cannot be empty"
            raise ValueError(msg)

    @property
    def is_directory(self) -> bool:
        """Check if this record describes a directory."""
        return self.kind == KIND_DIRECTORY

    @property
    def payload_name(self) -> str:
        """File name of the payload under the quarantine files directory."""
        if self.kind in KIND_MARKERS:
            return self.id
        return f"{self.id}.{self.kind}"

    @property
    def mode(self) -> int:
        """Numeric permission bits decoded from the symbolic string."""
        return permissions.decode(self.permissions)

    def payload_path(self, files_dir: Path) -> Path:
        """Location of this record's payload.

        Args:
            files_dir: The quarantine files directory.

        Returns:
            Path of the quarantined file or directory.
        """
        return files_dir / self.payload_name

    def to_row(self) -> list[str]:
        """Serialize to a store row in STORE_HEADER order."""
        return [
            self.id,
            self.original_name,
            self.original_path,
            self.deletion_timestamp.isoformat(timespec="seconds"),
            str(self.size_bytes),
            self.kind,
            self.permissions,
            self.owner,
        ]

    @classmethod
    def from_row(cls, row: list[str]) -> Record:
        """Deserialize from a store row.

        Args:
            row: Field values in STORE_HEADER order.

        Returns:
            Record instance.

        Raises:
            ValueError: If the row has the wrong field count or bad values.
        """
        if len(row) != len(STORE_HEADER):
            msg = f"Expected {len(STORE_HEADER)} fields, got {len(row)}"
            raise ValueError(msg)
        deleted_at = datetime.fromisoformat(row[3])
        # Rows without an offset are read as UTC
        if deleted_at.tzinfo is None:
            deleted_at = deleted_at.replace(tzinfo=UTC)
        return cls(
            id=row[0],
            original_name=row[1],
            original_path=row[2],
            deletion_timestamp=deleted_at,
            size_bytes=int(row[4]),
            kind=row[5],
            permissions=row[6],
            owner=row[7],
        )
