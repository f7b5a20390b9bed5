"""Quarantine id generation.

Ids combine the current Unix timestamp with a short random suffix,
e.g. ``1718035200_k3x9qa``. The id is also the payload file stem.
"""

import secrets
import string
import time
from collections.abc import Callable

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_SUFFIX_LENGTH = 6
MAX_ATTEMPTS = 16


def new_id() -> str:
    """Generate a new quarantine id.

    Returns:
        String of the form ``<unix seconds>_<6 random [a-z0-9]>``.
    """
    suffix = "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_SUFFIX_LENGTH))
    return f"{int(time.time())}_{suffix}"


def new_unique_id(is_taken: Callable[[str], bool]) -> str:
    """Generate an id that is not already in use.

    Args:
        is_taken: Predicate returning True for ids that are already live.

    Returns:
        An id for which is_taken returned False.

    Raises:
        RuntimeError: If no free id was found after MAX_ATTEMPTS tries.
    """
    for _ in range(MAX_ATTEMPTS):
        candidate = new_id()
        if not is_taken(candidate):
            return candidate
    msg = f"Could not generate a unique id after {MAX_ATTEMPTS} attempts"
    raise RuntimeError(msg)
