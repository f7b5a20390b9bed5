"""Search command implementation."""

from datetime import date, datetime
from typing import Annotated

import typer
from rich.markup import escape

from recyclebin.cli.display import create_records_table, print_records_json
from recyclebin.core.errors import RecordStoreError
from recyclebin.core.store import RecordStore
from recyclebin.query import SortKey, search_records, sort_records
from recyclebin.utils.formatting import console, print_error, print_info


def _parse_since(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD date, exiting on a malformed value."""
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        print_error(f"Invalid date '{value}', expected YYYY-MM-DD")
        raise typer.Exit(code=1) from e


def search(
    pattern: Annotated[
        str,
        typer.Argument(help="Glob pattern or text to look for in names."),
    ],
    path: Annotated[
        bool,
        typer.Option("--path", "-p", help="Also match against the original path."),
    ] = False,
    since: Annotated[
        str | None,
        typer.Option("--since", help="Only items deleted on or after this date (YYYY-MM-DD)."),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Search the recycle bin by name.

    Matching is case-insensitive. Plain text matches anywhere in the
    name; use * and ? for glob patterns.

    Examples:
        recyclebin search report
        recyclebin search "*.log" --since 2024-01-01
        recyclebin search projects/ --path
    """
    since_date = _parse_since(since)

    try:
        records = list(RecordStore().scan_all())
    except RecordStoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    matches = search_records(records, pattern, include_path=path, since=since_date)
    matches = sort_records(matches, SortKey.DATE)

    if not matches:
        print_info(f"No recycled items match '{escape(pattern)}'.")
        return

    if json_output:
        print_records_json(matches)
        return

    console.print(create_records_table(matches, title=f"Search: {escape(pattern)}"))
    console.print(f"\n[dim]{len(matches)} match(es)[/dim]")
