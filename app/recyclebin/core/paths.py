"""Quarantine root path management for recyclebin.

All state lives under a single quarantine root directory:

- Root: ~/.recycle_bin/ (or $RECYCLE_BIN_HOME)
- Payloads: <root>/files/
- Record store: <root>/metadata.db
- Config: <root>/config.toml
- Log: <root>/recyclebin.log
"""

import os
from pathlib import Path

ROOT_ENV_VAR = "RECYCLE_BIN_HOME"
DEFAULT_ROOT_NAME = ".recycle_bin"

FILES_DIRNAME = "files"
METADATA_FILENAME = "metadata.db"
CONFIG_FILENAME = "config.toml"
LOG_FILENAME = "recyclebin.log"
THEME_FILENAME = "theme.toml"


def get_root_dir() -> Path:
    """Get the quarantine root directory path.

    Returns:
        Path to ~/.recycle_bin/ (or $RECYCLE_BIN_HOME).
    """
    base = os.environ.get(ROOT_ENV_VAR)
    if base:
        return Path(base).expanduser()
    return Path.home() / DEFAULT_ROOT_NAME


def get_files_dir(root: Path | None = None) -> Path:
    """Get the directory holding quarantined payloads.

    Args:
        root: Optional quarantine root override.

    Returns:
        Path to <root>/files/.
    """
    return (root or get_root_dir()) / FILES_DIRNAME


def get_metadata_path(root: Path | None = None) -> Path:
    """Get the record store file path.

    Args:
        root: Optional quarantine root override.

    Returns:
        Path to <root>/metadata.db.
    """
    return (root or get_root_dir()) / METADATA_FILENAME


def get_config_path(root: Path | None = None) -> Path:
    """Get the configuration file path.

    Args:
        root: Optional quarantine root override.

    Returns:
        Path to <root>/config.toml.
    """
    return (root or get_root_dir()) / CONFIG_FILENAME


def get_log_path(root: Path | None = None) -> Path:
    """Get the log file path.

    Args:
        root: Optional quarantine root override.

    Returns:
        Path to <root>/recyclebin.log.
    """
    return (root or get_root_dir()) / LOG_FILENAME


def get_theme_path(root: Path | None = None) -> Path:
    """Get the user theme override path."""
    return (root or get_root_dir()) / THEME_FILENAME


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_root_dir(root: Path | None = None) -> Path:
    """Create the quarantine root directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(root or get_root_dir(), "recycle bin")


def ensure_files_dir(root: Path | None = None) -> Path:
    """Create the payload directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_files_dir(root), "payload")
