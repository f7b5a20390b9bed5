"""Read-only projections over the record store.

Search, sorting and statistics only ever consume records produced by
``RecordStore.scan_all()``; nothing here writes.
"""

import fnmatch
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from enum import Enum

from recyclebin.core.config import RecycleBinConfig
from recyclebin.models.record import Record


class SortKey(str, Enum):
    """Sort orders for record listings."""

    DATE = "date"
    NAME = "name"
    SIZE = "size"


def sort_records(records: Iterable[Record], key: SortKey = SortKey.DATE) -> list[Record]:
    """Sort records, newest / largest first for date and size."""
    if key == SortKey.NAME:
        return sorted(records, key=lambda r: r.original_name.casefold())
    if key == SortKey.SIZE:
        return sorted(records, key=lambda r: r.size_bytes, reverse=True)
    return sorted(records, key=lambda r: r.deletion_timestamp, reverse=True)


def search_records(
    records: Iterable[Record],
    pattern: str,
    include_path: bool = False,
    since: date | None = None,
) -> list[Record]:
    """Filter records by a case-insensitive glob pattern.

    A pattern without glob characters matches as a substring.

    Args:
        records: Records to filter.
        pattern: Glob pattern (``*.txt``) or plain text.
        include_path: Also match against the original path.
        since: Only keep records deleted on or after this date.

    Returns:
        Matching records in input order.
    """
    needle = pattern.casefold()
    if not any(char in needle for char in "*?["):
        needle = f"*{needle}*"

    matches: list[Record] = []
    for record in records:
        if since is not None and record.deletion_timestamp.date() < since:
            continue
        haystacks = [record.original_name]
        if include_path:
            haystacks.append(record.original_path)
        if any(fnmatch.fnmatchcase(h.casefold(), needle) for h in haystacks):
            matches.append(record)
    return matches


@dataclass(frozen=True, slots=True)
class BinStats:
    """Aggregate figures for the recycle bin.

    Attributes:
        total_records: Number of live records.
        file_count: Records describing files (and links).
        directory_count: Records describing directory shells.
        total_bytes: Sum of file record sizes.
        quota_bytes: Configured quota, None if disabled.
        oldest: Earliest deletion timestamp, None if empty.
        newest: Latest deletion timestamp, None if empty.
        expired_count: Records older than the retention window.
        retention_days: Configured retention window.
    """

    total_records: int
    file_count: int
    directory_count: int
    total_bytes: int
    quota_bytes: int | None
    oldest: datetime | None
    newest: datetime | None
    expired_count: int
    retention_days: int

    @property
    def quota_used_percent(self) -> float | None:
        """Share of the quota in use, None without a quota."""
        if not self.quota_bytes:
            return None
        return self.total_bytes / self.quota_bytes * 100


def compute_stats(
    records: Iterable[Record],
    config: RecycleBinConfig,
    now: datetime | None = None,
) -> BinStats:
    """Aggregate statistics over records.

    Directory records carry the aggregate size of their former
    contents, which are recorded individually as well, so only file
    records count toward the total size.

    Args:
        records: Records to aggregate.
        config: Settings providing quota and retention window.
        now: Reference time for expiry. Default: current UTC time.

    Returns:
        BinStats for the given records.
    """
    items = list(records)
    files = [r for r in items if not r.is_directory]
    cutoff = (now or datetime.now(UTC)) - timedelta(days=config.retention_days)
    timestamps = [r.deletion_timestamp for r in items]

    return BinStats(
        total_records=len(items),
        file_count=len(files),
        directory_count=len(items) - len(files),
        total_bytes=sum(r.size_bytes for r in files),
        quota_bytes=config.max_size_bytes,
        oldest=min(timestamps) if timestamps else None,
        newest=max(timestamps) if timestamps else None,
        expired_count=sum(1 for ts in timestamps if ts < cutoff),
        retention_days=config.retention_days,
    )
