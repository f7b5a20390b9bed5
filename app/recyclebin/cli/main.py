"""Main CLI application entry point.

Defines the Typer application, global options and command registration.
"""

from typing import Annotated

import typer

from recyclebin import __version__
from recyclebin.cli.commands import check, delete, empty, init, listing, restore, search, stats
from recyclebin.core.bootstrap import initialize
from recyclebin.core.config import ConfigError
from recyclebin.core.errors import RecycleBinError
from recyclebin.core.logs import setup_logging
from recyclebin.core.paths import get_log_path
from recyclebin.utils.formatting import print_error

app = typer.Typer(
    name="recyclebin",
    help="A recycle bin for the command line: delete safely, restore later.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"recyclebin version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug output to stderr.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """recyclebin - move files to a recycle bin instead of deleting them.

    Every deleted file or directory can be listed, searched and restored
    to its original location and permissions until the bin is emptied.
    """
    # Store options in context for commands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    # init reports what it creates, so it bootstraps on its own
    if ctx.invoked_subcommand == "init":
        return

    try:
        initialize()
    except (RuntimeError, RecycleBinError, ConfigError) as e:
        print_error(f"Cannot set up the recycle bin: {e}")
        raise typer.Exit(code=1) from e

    setup_logging(get_log_path(), verbose=verbose)


# Register commands
app.command(name="init")(init.init)
app.command(name="delete")(delete.delete)
app.command(name="list")(listing.list_items)
app.command(name="restore")(restore.restore)
app.command(name="search")(search.search)
app.command(name="empty")(empty.empty)
app.command(name="stats")(stats.stats)
app.command(name="check")(check.check)


if __name__ == "__main__":
    app()
