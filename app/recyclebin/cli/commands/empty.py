"""Empty command implementation.

Permanently erases recycled items, either all of them or a selection.
"""

from typing import Annotated

import typer

from recyclebin.cli.display import print_purge_results
from recyclebin.core.errors import RecycleBinError
from recyclebin.core.store import RecordStore
from recyclebin.quarantine.purge import PurgeEngine
from recyclebin.utils.formatting import format_size, print_error, print_info, print_success


def empty(
    keys: Annotated[
        list[str] | None,
        typer.Argument(help="Record ids or names to erase. Default: everything."),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Permanently erase items from the recycle bin.

    Without arguments the whole bin is emptied. This cannot be undone.

    Examples:
        recyclebin empty
        recyclebin empty 1718000000_ab12cd old.log -y
    """
    store = RecordStore()
    engine = PurgeEngine(store)

    if not keys:
        if not yes:
            confirmed = typer.confirm(
                "Permanently erase everything in the recycle bin?",
                default=False,
            )
            if not confirmed:
                print_info("Aborted.")
                raise typer.Exit(code=0)

        try:
            result = engine.purge_all(confirmed=True)
        except RecycleBinError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

        if result.records_removed == 0 and result.payloads_removed == 0:
            print_info("Recycle bin was already empty.")
            return
        print_success(
            f"Erased {result.records_removed} item(s), "
            f"freed {format_size(result.bytes_freed)}."
        )
        return

    if not yes:
        confirmed = typer.confirm(
            f"Permanently erase {len(keys)} item(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    results = engine.purge_selected(keys)
    print_purge_results(results)

    if any(not r.success for r in results):
        raise typer.Exit(code=1)
