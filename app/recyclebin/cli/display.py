"""Shared Rich display functions for records and operation results.

Provides the table builders and summary printers used across the CLI
commands (delete, list, search, restore, empty).
"""

import json

from rich.markup import escape
from rich.table import Table

from recyclebin.core import permissions
from recyclebin.models.record import Record
from recyclebin.models.results import (
    DeletionResult,
    PurgeResult,
    RestoreOutcome,
    RestoreResult,
)
from recyclebin.utils.formatting import (
    console,
    create_table,
    format_size,
    print_success,
    print_warning,
)

_OUTCOME_STYLES: dict[RestoreOutcome, str] = {
    RestoreOutcome.SUCCESS: "[restored]restored[/]",
    RestoreOutcome.MERGED: "[restored]merged[/]",
    RestoreOutcome.OVERWRITE: "[warning]overwritten[/]",
    RestoreOutcome.RENAMED: "[info]renamed[/]",
    RestoreOutcome.CANCELLED: "[muted]cancelled[/]",
    RestoreOutcome.FAILED: "[error]failed[/]",
}


def _format_kind(record: Record) -> str:
    """Render the kind column with its style."""
    if record.is_directory:
        return "[kind.directory]dir[/]"
    return f"[kind.file]{escape(record.kind.lower())}[/]"


def create_records_table(records: list[Record], title: str = "Recycle Bin") -> Table:
    """Create a Rich table listing records.

    Args:
        records: Records to display, already sorted.
        title: Table title.

    Returns:
        Rich Table with one row per record.
    """
    table = create_table(title)
    table.add_column("ID", style="muted", no_wrap=True)
    table.add_column("Name", no_wrap=True)
    table.add_column("Original Path", overflow="fold")
    table.add_column("Deleted", no_wrap=True)
    table.add_column("Size", style="info", justify="right")
    table.add_column("Kind", justify="center")
    table.add_column("Mode", style="muted")

    for record in records:
        table.add_row(
            record.id,
            f"[text]{escape(record.original_name)}[/]",
            escape(record.original_path),
            record.deletion_timestamp.astimezone().strftime("%Y-%m-%d %H:%M"),
            format_size(record.size_bytes),
            _format_kind(record),
            f"{record.permissions} ({permissions.to_octal(record.mode)})",
        )

    return table


def print_records_json(records: list[Record]) -> None:
    """Print records as JSON for scripting."""
    data = [
        {
            "id": r.id,
            "original_name": r.original_name,
            "original_path": r.original_path,
            "deletion_timestamp": r.deletion_timestamp.isoformat(),
            "size_bytes": r.size_bytes,
            "kind": r.kind,
            "permissions": r.permissions,
            "owner": r.owner,
        }
        for r in records
    ]
    console.print_json(json.dumps(data))


def print_deletion_results(results: list[DeletionResult]) -> None:
    """Display deletion results and a summary line."""
    table = create_table("Recycled")
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("Status", width=10)
    table.add_column("Records", justify="right")
    table.add_column("Details", style="dim")

    for r in results:
        if r.success:
            status = "[recycled]recycled[/]"
            detail = r.records[-1].id if r.records else ""
        else:
            status = "[error]failed[/]"
            detail = f"{r.error_kind}: {r.error}"
        table.add_row(escape(r.path), status, str(len(r.records)), escape(detail))

    console.print(table)
    _print_counts(sum(1 for r in results if r.success), sum(1 for r in results if r.failed))


def print_restore_results(results: list[RestoreResult]) -> None:
    """Display restore results and a summary line."""
    table = create_table("Restored")
    table.add_column("Key", style="bold", no_wrap=True)
    table.add_column("Status", width=12)
    table.add_column("Destination", overflow="fold")
    table.add_column("Details", style="dim")

    for r in results:
        if r.failed:
            detail = f"{r.error_kind}: {r.error}"
        elif r.outcome == RestoreOutcome.CANCELLED:
            detail = "destination already exists"
        else:
            detail = r.message or ""
        table.add_row(
            escape(r.key),
            _OUTCOME_STYLES[r.outcome],
            escape(r.destination or "-"),
            escape(detail),
        )

    console.print(table)
    _print_counts(sum(1 for r in results if not r.failed), sum(1 for r in results if r.failed))


def print_purge_results(results: list[PurgeResult]) -> None:
    """Display selective purge results and a summary line."""
    table = create_table("Purged")
    table.add_column("Key", style="bold", no_wrap=True)
    table.add_column("Status", width=10)
    table.add_column("Original Path", overflow="fold")
    table.add_column("Details", style="dim")

    for r in results:
        if r.success:
            status = "[purged]purged[/]"
            detail = "payload was already missing" if r.payload_missing else ""
        else:
            status = "[error]failed[/]"
            detail = f"{r.error_kind}: {r.error}"
        path = r.record.original_path if r.record else "-"
        table.add_row(escape(r.key), status, escape(path), escape(detail))

    console.print(table)
    _print_counts(sum(1 for r in results if r.success), sum(1 for r in results if not r.success))


def _print_counts(success_count: int, fail_count: int) -> None:
    """Print the one-line outcome summary shared by all result tables."""
    if fail_count:
        print_warning(f"{success_count} succeeded, {fail_count} failed")
    else:
        print_success(f"All {success_count} item(s) processed successfully.")
