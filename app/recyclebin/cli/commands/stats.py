"""Stats command implementation."""

from typing import Annotated

import typer
from rich.markup import escape

from recyclebin.core.config import require_config
from recyclebin.core.errors import RecordStoreError
from recyclebin.core.paths import get_root_dir
from recyclebin.core.store import RecordStore
from recyclebin.query import compute_stats
from recyclebin.utils.formatting import console, create_table, format_size, print_error


def stats(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show how much the recycle bin holds.

    Examples:
        recyclebin stats
    """
    config = require_config()
    try:
        summary = compute_stats(RecordStore().scan_all(), config)
    except RecordStoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(
            data={
                "total_records": summary.total_records,
                "file_count": summary.file_count,
                "directory_count": summary.directory_count,
                "total_bytes": summary.total_bytes,
                "quota_bytes": summary.quota_bytes,
                "quota_used_percent": summary.quota_used_percent,
                "oldest": summary.oldest.isoformat() if summary.oldest else None,
                "newest": summary.newest.isoformat() if summary.newest else None,
                "expired_count": summary.expired_count,
                "retention_days": summary.retention_days,
            }
        )
        return

    table = create_table("Recycle Bin Statistics")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Location", escape(str(get_root_dir())))
    table.add_row("Items", str(summary.total_records))
    table.add_row("Files", str(summary.file_count))
    table.add_row("Directories", str(summary.directory_count))
    table.add_row("Total size", format_size(summary.total_bytes))

    if summary.quota_bytes is None:
        table.add_row("Quota", "[muted]disabled[/]")
    else:
        percent = summary.quota_used_percent or 0.0
        style = "error" if percent >= 90 else "warning" if percent >= 75 else "success"
        table.add_row(
            "Quota",
            f"[{style}]{format_size(summary.quota_bytes)} ({percent:.1f}% used)[/]",
        )

    fmt = "%Y-%m-%d %H:%M"
    table.add_row("Oldest", summary.oldest.astimezone().strftime(fmt) if summary.oldest else "-")
    table.add_row("Newest", summary.newest.astimezone().strftime(fmt) if summary.newest else "-")
    table.add_row(
        f"Older than {summary.retention_days} days",
        str(summary.expired_count),
    )

    console.print(table)
