"""Filesystem probes used by the quarantine engines.

Post-order directory walks, aggregate sizes, free-space queries and
ownership lookups. Symlinks are never followed.
"""

import logging
import os
import pwd
import shutil
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


def is_real_dir(path: Path) -> bool:
    """Check if path is a directory and not a symlink to one."""
    return path.is_dir() and not path.is_symlink()


def lexists(path: Path) -> bool:
    """Check if anything (including a dead symlink) exists at path."""
    return path.exists() or path.is_symlink()


def iter_post_order(root: Path) -> Iterator[Path]:
    """Yield every descendant of root, children before their parents.

    The root itself is not yielded. Entries within a directory are
    visited in name order so the sequence is deterministic.

    Args:
        root: Directory to walk.

    Yields:
        Descendant paths in post-order.
    """
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        child = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            yield from iter_post_order(child)
        yield child


def compute_size(path: Path) -> int:
    """Compute the size of a file or the aggregate size of a directory.

    Unreadable entries inside a directory count as zero.

    Args:
        path: File or directory.

    Returns:
        Size in bytes.
    """
    if not is_real_dir(path):
        return path.lstat().st_size

    total = 0
    for child in iter_post_order(path):
        if is_real_dir(child):
            continue
        try:
            total += child.lstat().st_size
        except OSError as e:
            logger.debug("Cannot stat %s: %s", child, e)
    return total


def free_space(path: Path) -> int:
    """Free bytes on the volume holding path.

    Walks up to the nearest existing ancestor, so it works for
    destinations that have not been created yet.

    Args:
        path: Any path, existing or not.

    Returns:
        Free bytes available.
    """
    probe = path
    while not probe.exists() and probe != probe.parent:
        probe = probe.parent
    return shutil.disk_usage(probe).free


def original_location(path: Path) -> Path:
    """Absolute location to record for a path.

    The parent directory is fully resolved and the final component
    kept, so a symlink is recorded at its own location, not its target's.
    """
    absolute = Path(os.path.abspath(path))
    return absolute.parent.resolve() / absolute.name


def owner_name(path: Path) -> str:
    """Owner user name of path, or the numeric uid if it has no name."""
    uid = path.lstat().st_uid
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)
