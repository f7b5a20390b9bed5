"""List command implementation.

Shows the contents of the recycle bin.
"""

from typing import Annotated

import typer

from recyclebin.cli.display import create_records_table, print_records_json
from recyclebin.core.errors import RecordStoreError
from recyclebin.core.store import RecordStore
from recyclebin.query import SortKey, sort_records
from recyclebin.utils.formatting import console, format_size, print_error, print_info


def list_items(
    sort: Annotated[
        SortKey,
        typer.Option("--sort", "-s", help="Sort order.", case_sensitive=False),
    ] = SortKey.DATE,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", help="Limit number of results."),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """List everything in the recycle bin.

    Examples:
        recyclebin list
        recyclebin list --sort size -l 10
        recyclebin list --json
    """
    try:
        records = sort_records(RecordStore().scan_all(), sort)
    except RecordStoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not records:
        print_info("Recycle bin is empty.")
        return

    shown = records[:limit] if limit else records

    if json_output:
        print_records_json(shown)
        return

    console.print(create_records_table(shown))

    total_size = sum(r.size_bytes for r in records if not r.is_directory)
    console.print(f"\n[dim]{len(records)} item(s), {format_size(total_size)} total[/dim]")
    if len(shown) < len(records):
        console.print(f"[dim](showing {len(shown)} of {len(records)}, limited to {limit})[/dim]")
