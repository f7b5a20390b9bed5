"""Unit tests for the CLI entry point."""

from pathlib import Path
from unittest.mock import patch

from recyclebin import __version__
from recyclebin.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainCallback:
    """Tests for global options and automatic setup."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"recyclebin version {__version__}" in result.stdout

    def test_help_lists_commands(self) -> None:
        """--help shows every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("delete", "list", "restore", "search", "empty", "stats", "check"):
            assert command in result.stdout

    def test_any_command_bootstraps_root(self, bin_root: Path) -> None:
        """Running a command creates the layout on first use."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert (bin_root / "files").is_dir()
        assert (bin_root / "metadata.db").exists()
        assert (bin_root / "config.toml").exists()

    def test_setup_failure_exits(self) -> None:
        """A root that can't be created aborts with status 1."""
        with patch(
            "recyclebin.cli.main.initialize",
            side_effect=RuntimeError("Cannot create recycle bin directory"),
        ):
            result = runner.invoke(app, ["list"])

        assert result.exit_code == 1

    def test_operations_are_logged(self, bin_root: Path, tmp_path: Path) -> None:
        """Mutating commands append to the log file."""
        target = tmp_path / "a.txt"
        target.write_text("x")

        result = runner.invoke(app, ["delete", str(target)])

        assert result.exit_code == 0
        assert "Recycled" in (bin_root / "recyclebin.log").read_text()
