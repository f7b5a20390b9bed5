"""Delete command implementation.

Moves files and directories into the recycle bin.
"""

from typing import Annotated

import typer

from recyclebin.cli.display import print_deletion_results
from recyclebin.core.config import require_config
from recyclebin.core.store import RecordStore
from recyclebin.quarantine.deletion import DeletionEngine


def delete(
    ctx: typer.Context,
    paths: Annotated[
        list[str],
        typer.Argument(help="Files or directories to move to the recycle bin."),
    ],
) -> None:
    """Move files and directories to the recycle bin.

    Directories are recycled item by item: every file and subdirectory
    gets its own entry, followed by the directory itself.

    Examples:
        recyclebin delete notes.txt
        recyclebin delete build/ old.log
    """
    config = require_config()
    engine = DeletionEngine(RecordStore(), config=config)
    results = engine.delete(paths)

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    if not quiet or any(r.failed for r in results):
        print_deletion_results(results)

    if any(r.failed for r in results):
        raise typer.Exit(code=1)
