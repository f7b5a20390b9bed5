"""Unit tests for empty command."""

from pathlib import Path

from recyclebin.cli.main import app
from recyclebin.core.paths import get_files_dir
from recyclebin.core.store import RecordStore
from typer.testing import CliRunner

runner = CliRunner()


def _recycle(tmp_path: Path, *names: str) -> None:
    """Create and recycle files through the CLI."""
    paths = []
    for name in names:
        (tmp_path / name).write_text(name)
        paths.append(str(tmp_path / name))
    assert runner.invoke(app, ["delete", *paths]).exit_code == 0


class TestEmptyCommand:
    """Tests for recyclebin empty command."""

    def test_empty_all_with_yes(self, tmp_path: Path) -> None:
        """--yes wipes everything without asking."""
        _recycle(tmp_path, "a.txt", "b.txt")

        result = runner.invoke(app, ["empty", "--yes"])

        assert result.exit_code == 0
        assert "Erased 2 item(s)" in result.stdout
        assert list(RecordStore().scan_all()) == []
        assert list(get_files_dir().iterdir()) == []

    def test_empty_all_confirmed(self, tmp_path: Path) -> None:
        """Answering yes to the prompt wipes everything."""
        _recycle(tmp_path, "a.txt")

        result = runner.invoke(app, ["empty"], input="y\n")

        assert result.exit_code == 0
        assert list(RecordStore().scan_all()) == []

    def test_empty_all_declined(self, tmp_path: Path) -> None:
        """Declining the prompt keeps everything."""
        _recycle(tmp_path, "a.txt")

        result = runner.invoke(app, ["empty"], input="n\n")

        assert result.exit_code == 0
        assert "Aborted." in result.stdout
        assert len(list(RecordStore().scan_all())) == 1

    def test_empty_already_empty(self) -> None:
        """Emptying an empty bin says so."""
        result = runner.invoke(app, ["empty", "--yes"])

        assert result.exit_code == 0
        assert "already empty" in result.stdout

    def test_empty_selected(self, tmp_path: Path) -> None:
        """Keys limit the purge to matching items."""
        _recycle(tmp_path, "a.txt", "b.txt")

        result = runner.invoke(app, ["empty", "a.txt", "--yes"])

        assert result.exit_code == 0
        assert [r.original_name for r in RecordStore().scan_all()] == ["b.txt"]

    def test_empty_selected_unknown_key(self, tmp_path: Path) -> None:
        """Unknown keys fail the command."""
        _recycle(tmp_path, "a.txt")

        result = runner.invoke(app, ["empty", "nope", "-y"])

        assert result.exit_code == 1
        assert len(list(RecordStore().scan_all())) == 1
