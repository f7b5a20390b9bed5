"""Restore command implementation.

Moves recycled items back to where they were deleted from.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from recyclebin.cli.display import print_restore_results
from recyclebin.core.store import RecordStore
from recyclebin.models.record import Record
from recyclebin.models.results import ConflictChoice
from recyclebin.quarantine.restoration import (
    ConflictResolver,
    RestorationEngine,
    fixed_choice,
)
from recyclebin.utils.formatting import console, print_error

_PROMPT_CHOICES: dict[str, ConflictChoice] = {
    "o": ConflictChoice.OVERWRITE,
    "overwrite": ConflictChoice.OVERWRITE,
    "r": ConflictChoice.RENAME,
    "rename": ConflictChoice.RENAME,
    "c": ConflictChoice.CANCEL,
    "cancel": ConflictChoice.CANCEL,
}


def _prompt_resolver(record: Record, destination: Path) -> ConflictChoice:
    """Ask the user what to do about an occupied destination."""
    console.print(
        f"\n[warning]{escape(str(destination))}[/] already exists "
        f"(restoring [muted]{record.id}[/])."
    )
    while True:
        answer = typer.prompt("[o]verwrite, [r]ename or [c]ancel?", default="c")
        choice = _PROMPT_CHOICES.get(answer.strip().lower())
        if choice is not None:
            return choice
        print_error(f"Invalid choice: {answer}")


def _select_resolver(overwrite: bool, rename: bool, skip: bool) -> ConflictResolver:
    """Map the mutually exclusive conflict flags to a resolver."""
    if sum((overwrite, rename, skip)) > 1:
        print_error("Use only one of --overwrite, --rename and --skip.")
        raise typer.Exit(code=1)
    if overwrite:
        return fixed_choice(ConflictChoice.OVERWRITE)
    if rename:
        return fixed_choice(ConflictChoice.RENAME)
    if skip:
        return fixed_choice(ConflictChoice.CANCEL)
    return _prompt_resolver


def restore(
    ctx: typer.Context,
    keys: Annotated[
        list[str],
        typer.Argument(help="Record ids or original names to restore."),
    ],
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Replace whatever occupies the destination."),
    ] = False,
    rename: Annotated[
        bool,
        typer.Option("--rename", help="Restore next to an occupied destination under a new name."),
    ] = False,
    skip: Annotated[
        bool,
        typer.Option("--skip", help="Leave items with an occupied destination in the bin."),
    ] = False,
) -> None:
    """Restore recycled items to their original location.

    Items are looked up by id first, then by original name. When the
    destination is occupied you are asked whether to overwrite it,
    restore under a timestamped name or leave the item in the bin.

    Examples:
        recyclebin restore 1718000000_ab12cd
        recyclebin restore notes.txt --rename
    """
    resolver = _select_resolver(overwrite, rename, skip)
    engine = RestorationEngine(RecordStore(), resolver=resolver)
    results = engine.restore_many(keys)

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    if not quiet or any(r.failed for r in results):
        print_restore_results(results)

    if any(r.failed for r in results):
        raise typer.Exit(code=1)
