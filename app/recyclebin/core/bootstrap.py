"""One-time setup of the quarantine root.

Creates the directory layout, the record store with its header, the
default config and an empty log file. Existing pieces are left as they
are, so running it again is harmless.
"""

import logging
from pathlib import Path

from recyclebin.core.config import RecycleBinConfig, save_config
from recyclebin.core.paths import (
    ensure_files_dir,
    ensure_root_dir,
    get_config_path,
    get_files_dir,
    get_log_path,
    get_metadata_path,
    get_root_dir,
)
from recyclebin.core.store import RecordStore

logger = logging.getLogger(__name__)


def initialize(root: Path | None = None) -> list[Path]:
    """Create whatever part of the quarantine layout is missing.

    Args:
        root: Quarantine root. Default: ~/.recycle_bin

    Returns:
        Paths that were created by this call.

    Raises:
        RuntimeError: If a directory cannot be created.
        RecordStoreError: If the store cannot be written.
        ConfigError: If the default config cannot be written.
    """
    root = root or get_root_dir()
    created: list[Path] = []

    for path, ensure in ((root, ensure_root_dir), (get_files_dir(root), ensure_files_dir)):
        existed = path.is_dir()
        ensure(root)
        if not existed:
            created.append(path)

    store_path = get_metadata_path(root)
    if RecordStore(store_path).initialize():
        created.append(store_path)

    config_path = get_config_path(root)
    if not config_path.exists():
        save_config(RecycleBinConfig(), config_path)
        created.append(config_path)

    log_path = get_log_path(root)
    if not log_path.exists():
        log_path.touch()
        created.append(log_path)

    for path in created:
        logger.debug("Created %s", path)
    return created
