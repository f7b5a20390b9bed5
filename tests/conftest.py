"""Pytest configuration and shared fixtures.

Every test runs against its own quarantine root under tmp_path, so the
real ~/.recycle_bin is never touched.
"""

from datetime import UTC, datetime
from pathlib import Path

import pytest
from recyclebin.core.bootstrap import initialize
from recyclebin.core.config import RecycleBinConfig
from recyclebin.core.paths import ROOT_ENV_VAR, get_files_dir
from recyclebin.core.store import RecordStore
from recyclebin.models.record import Record
from recyclebin.quarantine.deletion import DeletionEngine
from recyclebin.quarantine.purge import PurgeEngine
from recyclebin.quarantine.restoration import RestorationEngine


@pytest.fixture(autouse=True)
def bin_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the quarantine root at a fresh directory for each test."""
    root = tmp_path / "bin"
    monkeypatch.setenv(ROOT_ENV_VAR, str(root))
    return root


@pytest.fixture
def initialized_root(bin_root: Path) -> Path:
    """Quarantine root with the full layout created."""
    initialize(bin_root)
    return bin_root


@pytest.fixture
def files_dir(initialized_root: Path) -> Path:
    """Payload directory of the initialized quarantine root."""
    return get_files_dir(initialized_root)


@pytest.fixture
def store(initialized_root: Path) -> RecordStore:
    """Record store of the initialized quarantine root."""
    return RecordStore(initialized_root / "metadata.db")


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Directory holding the files tests recycle."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def deleter(store: RecordStore, initialized_root: Path) -> DeletionEngine:
    """Deletion engine with the quota disabled."""
    return DeletionEngine(store, root=initialized_root, config=RecycleBinConfig(max_size_mb=0))


@pytest.fixture
def restorer(store: RecordStore, initialized_root: Path) -> RestorationEngine:
    """Restoration engine that cancels on conflicts."""
    return RestorationEngine(store, root=initialized_root)


@pytest.fixture
def purger(store: RecordStore, initialized_root: Path) -> PurgeEngine:
    """Purge engine for the test quarantine root."""
    return PurgeEngine(store, root=initialized_root)


def make_record(
    record_id: str = "1718000000_abc123",
    name: str = "notes.txt",
    path: str = "/tmp/notes.txt",
    size: int = 42,
    kind: str = "txt",
    permissions: str = "-rw-r--r--",
    deleted_at: datetime | None = None,
) -> Record:
    """Create a test Record with sensible defaults."""
    return Record(
        id=record_id,
        original_name=name,
        original_path=path,
        deletion_timestamp=deleted_at or datetime(2024, 6, 10, 12, 0, tzinfo=UTC),
        size_bytes=size,
        kind=kind,
        permissions=permissions,
        owner="alice",
    )


@pytest.fixture
def record_factory():
    """Factory fixture building Records; see make_record for defaults."""
    return make_record
