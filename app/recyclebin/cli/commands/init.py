"""Init command implementation.

Creates the quarantine root, record store, default config and log file.
"""

import typer
from rich.markup import escape

from recyclebin.core.bootstrap import initialize
from recyclebin.core.config import ConfigError
from recyclebin.core.errors import RecycleBinError
from recyclebin.core.logs import setup_logging
from recyclebin.core.paths import get_log_path, get_root_dir
from recyclebin.utils.formatting import console, print_error, print_info, print_success


def init(ctx: typer.Context) -> None:
    """Create the recycle bin directory layout.

    Safe to run repeatedly: existing files are never touched.
    """
    root = get_root_dir()
    try:
        created = initialize(root)
    except (RuntimeError, RecycleBinError, ConfigError) as e:
        print_error(f"Cannot set up the recycle bin: {e}")
        raise typer.Exit(code=1) from e

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    setup_logging(get_log_path(root), verbose=verbose)

    if not created:
        print_info(f"Recycle bin already initialized at {escape(str(root))}")
        return

    for path in created:
        console.print(f"  [success]created[/] [muted]{escape(str(path))}[/]")
    print_success(f"Recycle bin ready at {escape(str(root))}")
