"""Check command implementation.

Reports records without a payload and payloads without a record.
"""

from typing import Annotated

import typer
from rich.markup import escape

from recyclebin.core.errors import RecycleBinError
from recyclebin.core.store import RecordStore
from recyclebin.quarantine.maintenance import drop_missing_payload_records, find_orphans
from recyclebin.utils.formatting import (
    console,
    create_table,
    print_error,
    print_success,
    print_warning,
)


def check(
    fix: Annotated[
        bool,
        typer.Option("--fix", help="Drop records whose payload is missing."),
    ] = False,
) -> None:
    """Check the record store against the stored payloads.

    Exits with status 1 while inconsistencies remain.

    Examples:
        recyclebin check
        recyclebin check --fix
    """
    store = RecordStore()
    try:
        report = find_orphans(store)
    except RecycleBinError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if report.clean:
        print_success("Recycle bin is consistent.")
        return

    table = create_table("Inconsistencies")
    table.add_column("Problem", style="bold", no_wrap=True)
    table.add_column("Item", overflow="fold")
    for record in report.missing_payloads:
        item = f"{record.id} ({escape(record.original_path)})"
        table.add_row("[warning]missing payload[/]", item)
    for payload in report.stray_payloads:
        table.add_row("[info]stray payload[/]", escape(str(payload)))
    console.print(table)

    if not fix:
        print_warning("Run 'recyclebin check --fix' to drop records with missing payloads.")
        raise typer.Exit(code=1)

    try:
        removed = drop_missing_payload_records(store, report)
    except RecycleBinError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Dropped {removed} record(s) with missing payloads.")
    if report.stray_payloads:
        print_warning(f"{len(report.stray_payloads)} stray payload(s) left in place.")
        raise typer.Exit(code=1)
