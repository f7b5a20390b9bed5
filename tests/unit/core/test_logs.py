"""Unit tests for logging setup."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from recyclebin.core.logs import LOGGER_NAME, setup_logging
from rich.logging import RichHandler


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Remove handlers added by a test so they don't leak."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_file_handler(self, tmp_path: Path) -> None:
        """INFO records are written to the log file."""
        log_path = tmp_path / "recyclebin.log"
        setup_logging(log_path)

        logging.getLogger(f"{LOGGER_NAME}.quarantine").info("Recycled %s", "/tmp/a.txt")
        logging.getLogger(f"{LOGGER_NAME}.quarantine").debug("not written")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()

        content = log_path.read_text()
        assert "INFO recyclebin.quarantine: Recycled /tmp/a.txt" in content
        assert "not written" not in content

    def test_verbose_adds_rich_handler(self, tmp_path: Path) -> None:
        """Verbose mode adds a Rich console handler at DEBUG."""
        logger = setup_logging(tmp_path / "recyclebin.log", verbose=True)

        assert logger.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in logger.handlers)

    def test_repeated_setup_replaces_handlers(self, tmp_path: Path) -> None:
        """Calling setup twice doesn't stack handlers."""
        setup_logging(tmp_path / "recyclebin.log")
        logger = setup_logging(tmp_path / "recyclebin.log")

        assert len(logger.handlers) == 1

    def test_unwritable_log_file(self, tmp_path: Path) -> None:
        """A log file that cannot be opened only produces a warning."""
        logger = setup_logging(tmp_path / "missing" / "recyclebin.log")

        assert logger.handlers == []

    def test_no_log_path(self) -> None:
        """Without a path and without verbose no handler is installed."""
        assert setup_logging().handlers == []
