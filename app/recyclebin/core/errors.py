"""Error hierarchy for quarantine lifecycle operations.

Engines catch these per item and turn them into result objects; the
class name doubles as the error kind shown to the user.
"""


class RecycleBinError(Exception):
    """Base exception for recycle bin errors."""

    @property
    def kind(self) -> str:
        """Short error kind name used in results and reports."""
        return type(self).__name__


class NotFoundError(RecycleBinError):
    """Raised when a path or a record does not exist."""


class AmbiguousNameError(RecycleBinError):
    """Raised when a name matches more than one record."""

    def __init__(self, name: str, ids: list[str]) -> None:
        self.name = name
        self.ids = ids
        super().__init__(
            f"Name '{name}' matches {len(ids)} records ({', '.join(ids)}); use an id instead"
        )


class PermissionDeniedError(RecycleBinError):
    """Raised when filesystem rights are insufficient."""


class InsufficientSpaceError(RecycleBinError):
    """Raised when the destination volume or quota lacks capacity."""


class SelfRecycleError(RecycleBinError):
    """Raised when deleting a path inside the quarantine root."""


class SelfRestoreError(RecycleBinError):
    """Raised when a record would restore into the quarantine root."""


class MissingPayloadError(RecycleBinError):
    """Raised when a record exists but its payload does not."""


class MoveError(RecycleBinError):
    """Raised when relocating a payload fails unexpectedly."""


class RecordStoreError(RecycleBinError):
    """Raised when the record store cannot be read or written."""


class ConfirmationRequiredError(RecycleBinError):
    """Raised when an irreversible operation runs without confirmation."""


def from_os_error(error: OSError, context: str) -> RecycleBinError:
    """Translate an unexpected OSError into the matching error kind.

    Args:
        error: The original error.
        context: What was being attempted, used as the message prefix.

    Returns:
        A RecycleBinError subclass instance for the caller to raise.
    """
    message = f"{context}: {error}"
    if isinstance(error, FileNotFoundError):
        return NotFoundError(message)
    if isinstance(error, PermissionError):
        return PermissionDeniedError(message)
    return MoveError(message)
