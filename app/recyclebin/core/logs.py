"""Logging setup for the recyclebin CLI.

Library modules only create module loggers; handlers are attached here,
once per process, by the CLI entry point.
"""

import logging
from pathlib import Path

from rich.logging import RichHandler

from recyclebin.utils.formatting import err_console

LOGGER_NAME = "recyclebin"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(log_path: Path | None = None, verbose: bool = False) -> logging.Logger:
    """Attach file and console handlers to the package logger.

    Calling this again replaces the handlers installed by a previous
    call instead of stacking new ones.

    Args:
        log_path: File receiving INFO and above. Skipped if None or if
            the file cannot be opened.
        verbose: Also log DEBUG and above to stderr via Rich.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_recyclebin_handler", False):
            logger.removeHandler(handler)
            handler.close()

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if log_path is not None:
        try:
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError as e:
            err_console.print(f"[warning]Warning:[/] Cannot open log file {log_path}: {e}")
        else:
            file_handler.setLevel(logging.INFO)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            file_handler._recyclebin_handler = True  # type: ignore[attr-defined]
            logger.addHandler(file_handler)

    if verbose:
        console_handler = RichHandler(console=err_console, show_path=False)
        console_handler.setLevel(logging.DEBUG)
        console_handler._recyclebin_handler = True  # type: ignore[attr-defined]
        logger.addHandler(console_handler)

    return logger
