"""Unit tests for PurgeEngine."""

from pathlib import Path
from unittest.mock import patch

import pytest
from recyclebin.core.errors import ConfirmationRequiredError, PermissionDeniedError
from recyclebin.core.store import RecordStore
from recyclebin.models.record import STORE_HEADER
from recyclebin.quarantine.deletion import DeletionEngine
from recyclebin.quarantine.maintenance import find_orphans
from recyclebin.quarantine.purge import PurgeEngine


@pytest.fixture
def populated(deleter: DeletionEngine, work_dir: Path):
    """Recycle a file and a small directory tree."""
    (work_dir / "a.txt").write_text("aaaa")
    tree = work_dir / "tree"
    tree.mkdir()
    (tree / "b.log").write_text("bb")
    return deleter.delete([str(work_dir / "a.txt"), str(tree)])


class TestPurgeAll:
    """Tests for PurgeEngine.purge_all."""

    def test_requires_confirmation(
        self, purger: PurgeEngine, populated, store: RecordStore
    ) -> None:
        """Without confirmation nothing is erased."""
        with pytest.raises(ConfirmationRequiredError):
            purger.purge_all()

        assert len(list(store.scan_all())) == 3

    def test_erases_everything(
        self, purger: PurgeEngine, populated, store: RecordStore, files_dir: Path
    ) -> None:
        """Payloads and records are all gone afterwards."""
        result = purger.purge_all(confirmed=True)

        assert result.records_removed == 3
        assert result.payloads_removed == 3
        assert result.bytes_freed == 6
        assert list(files_dir.iterdir()) == []
        assert store.path.read_text() == ",".join(STORE_HEADER) + "\n"

    def test_erases_stray_payloads(
        self, purger: PurgeEngine, store: RecordStore, files_dir: Path
    ) -> None:
        """Payloads without a record are removed too."""
        (files_dir / "stray.bin").write_text("x")
        (files_dir / "stray_dir").mkdir()

        result = purger.purge_all(confirmed=True)

        assert result.records_removed == 0
        assert result.payloads_removed == 2
        assert list(files_dir.iterdir()) == []

    def test_empty_bin(self, purger: PurgeEngine) -> None:
        """Purging an empty bin is a no-op."""
        result = purger.purge_all(confirmed=True)

        assert (result.records_removed, result.payloads_removed, result.bytes_freed) == (0, 0, 0)

    def test_erase_failure(self, purger: PurgeEngine, populated, store: RecordStore) -> None:
        """A payload that can't be erased aborts the wipe before the reset."""
        with (
            patch.object(Path, "unlink", side_effect=PermissionError("busy")),
            pytest.raises(PermissionDeniedError, match="busy"),
        ):
            purger.purge_all(confirmed=True)

        assert len(list(store.scan_all())) == 3

    def test_failure_midway_drops_erased_records(
        self, purger: PurgeEngine, deleter: DeletionEngine, store: RecordStore,
        files_dir: Path, work_dir: Path, initialized_root: Path,
    ) -> None:
        """Records of payloads erased before the failure are dropped, the rest kept."""
        for name in ("a.txt", "b.txt"):
            (work_dir / name).write_text(name)
        deleter.delete([str(work_dir / "a.txt"), str(work_dir / "b.txt")])

        real_unlink = Path.unlink
        calls: list[Path] = []

        def flaky_unlink(path: Path, missing_ok: bool = False) -> None:
            calls.append(path)
            if len(calls) == 2:
                raise PermissionError("busy")
            real_unlink(path, missing_ok=missing_ok)

        with (
            patch.object(Path, "unlink", flaky_unlink),
            pytest.raises(PermissionDeniedError, match="busy"),
        ):
            purger.purge_all(confirmed=True)

        (survivor,) = store.scan_all()
        assert survivor.payload_path(files_dir).exists()
        assert find_orphans(store, initialized_root).missing_payloads == ()


class TestPurgeSelected:
    """Tests for PurgeEngine.purge_selected."""

    def test_purge_by_id(
        self, purger: PurgeEngine, populated, store: RecordStore, files_dir: Path
    ) -> None:
        """Only the selected item is erased."""
        file_record = populated[0].records[0]

        (result,) = purger.purge_selected([file_record.id])

        assert result.success is True
        assert result.payload_missing is False
        assert not file_record.payload_path(files_dir).exists()
        assert not store.contains(file_record.id)
        assert len(list(store.scan_all())) == 2

    def test_purge_directory_record(
        self, purger: PurgeEngine, populated, files_dir: Path
    ) -> None:
        """Directory payloads are removed recursively."""
        dir_record = populated[1].records[-1]
        (files_dir / dir_record.id / "leftover").write_text("x")

        (result,) = purger.purge_selected(["tree"])

        assert result.success is True
        assert result.record == dir_record
        assert not (files_dir / dir_record.id).exists()

    def test_missing_payload_still_drops_record(
        self, purger: PurgeEngine, populated, store: RecordStore, files_dir: Path
    ) -> None:
        """A record without payload is dropped and flagged."""
        record = populated[0].records[0]
        record.payload_path(files_dir).unlink()

        (result,) = purger.purge_selected([record.id])

        assert result.success is True
        assert result.payload_missing is True
        assert not store.contains(record.id)

    def test_unknown_key(self, purger: PurgeEngine, populated, store: RecordStore) -> None:
        """Unknown keys fail without touching anything else."""
        results = purger.purge_selected(["nope", "a.txt"])

        assert results[0].success is False
        assert results[0].error_kind == "NotFoundError"
        assert results[1].success is True
        assert len(list(store.scan_all())) == 2
