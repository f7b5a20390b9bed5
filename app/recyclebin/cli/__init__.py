"""Command-line interface for recyclebin."""

from recyclebin.cli.main import app

__all__ = ["app"]
