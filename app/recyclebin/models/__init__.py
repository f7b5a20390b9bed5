"""Data models for recyclebin.

This module exports the core data structures used throughout the application.
"""

from recyclebin.models.record import (
    KIND_DIRECTORY,
    KIND_FILE,
    STORE_HEADER,
    Record,
    kind_for,
)
from recyclebin.models.results import (
    ConflictChoice,
    DeletionResult,
    PurgeAllResult,
    PurgeResult,
    RestoreOutcome,
    RestoreResult,
)

__all__ = [
    "KIND_DIRECTORY",
    "KIND_FILE",
    "STORE_HEADER",
    "ConflictChoice",
    "DeletionResult",
    "PurgeAllResult",
    "PurgeResult",
    "Record",
    "RestoreOutcome",
    "RestoreResult",
    "kind_for",
]
