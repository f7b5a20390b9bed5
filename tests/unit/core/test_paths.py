"""Unit tests for quarantine root path management."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from recyclebin.core.paths import (
    DEFAULT_ROOT_NAME,
    ROOT_ENV_VAR,
    ensure_files_dir,
    ensure_root_dir,
    get_config_path,
    get_files_dir,
    get_log_path,
    get_metadata_path,
    get_root_dir,
)


class TestGetRootDir:
    """Tests for get_root_dir function."""

    def test_default_root_dir(self) -> None:
        """get_root_dir falls back to ~/.recycle_bin."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_root_dir()

        assert result == Path.home() / DEFAULT_ROOT_NAME

    def test_respects_env_var(self, tmp_path: Path) -> None:
        """get_root_dir honours RECYCLE_BIN_HOME."""
        with patch.dict(os.environ, {ROOT_ENV_VAR: str(tmp_path / "custom")}):
            result = get_root_dir()

        assert result == tmp_path / "custom"

    def test_empty_env_var_ignored(self) -> None:
        """An empty RECYCLE_BIN_HOME means the default."""
        with patch.dict(os.environ, {ROOT_ENV_VAR: ""}):
            result = get_root_dir()

        assert result == Path.home() / DEFAULT_ROOT_NAME


class TestLayoutPaths:
    """Tests for the paths below the quarantine root."""

    def test_layout_under_explicit_root(self, tmp_path: Path) -> None:
        """All layout paths hang off the given root."""
        assert get_files_dir(tmp_path) == tmp_path / "files"
        assert get_metadata_path(tmp_path) == tmp_path / "metadata.db"
        assert get_config_path(tmp_path) == tmp_path / "config.toml"
        assert get_log_path(tmp_path) == tmp_path / "recyclebin.log"

    def test_layout_under_default_root(self, bin_root: Path) -> None:
        """Without a root argument the environment root is used."""
        assert get_files_dir() == bin_root / "files"
        assert get_metadata_path() == bin_root / "metadata.db"


class TestEnsureDirs:
    """Tests for the directory creation helpers."""

    def test_creates_root_and_files_dir(self, bin_root: Path) -> None:
        """ensure_* helpers create the directories."""
        assert ensure_root_dir() == bin_root
        assert ensure_files_dir() == bin_root / "files"
        assert (bin_root / "files").is_dir()

    def test_existing_dir_is_fine(self, bin_root: Path) -> None:
        """Calling twice does not fail."""
        ensure_root_dir()
        ensure_root_dir()
        assert bin_root.is_dir()

    def test_permission_error(self, bin_root: Path) -> None:
        """Permission problems become RuntimeError."""
        with (
            patch.object(Path, "mkdir", side_effect=PermissionError("denied")),
            pytest.raises(RuntimeError, match="Permission denied"),
        ):
            ensure_root_dir()

    def test_other_os_error(self, bin_root: Path) -> None:
        """Other OS errors become RuntimeError too."""
        with (
            patch.object(Path, "mkdir", side_effect=OSError("disk on fire")),
            pytest.raises(RuntimeError, match="disk on fire"),
        ):
            ensure_files_dir()
