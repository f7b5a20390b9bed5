"""CLI commands for recyclebin.

This package contains all command implementations.
"""

from recyclebin.cli.commands import check, delete, empty, init, listing, restore, search, stats

__all__ = ["check", "delete", "empty", "init", "listing", "restore", "search", "stats"]
