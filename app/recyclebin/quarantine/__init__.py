"""Quarantine lifecycle engines.

This module provides the deletion, restoration and purge engines that
move items in and out of quarantine, plus consistency checks.
"""

from recyclebin.quarantine.deletion import DeletionEngine
from recyclebin.quarantine.maintenance import (
    OrphanReport,
    drop_missing_payload_records,
    find_orphans,
)
from recyclebin.quarantine.purge import PurgeEngine
from recyclebin.quarantine.restoration import (
    ConflictResolver,
    RestorationEngine,
    fixed_choice,
    renamed_destination,
)

__all__ = [
    "ConflictResolver",
    "DeletionEngine",
    "OrphanReport",
    "PurgeEngine",
    "RestorationEngine",
    "drop_missing_payload_records",
    "find_orphans",
    "fixed_choice",
    "renamed_destination",
]
