"""Conversion between numeric modes and ls-style permission strings.

The store keeps permissions in the ten-character form captured at
deletion time (``-rwxr-xr--``); restore needs the numeric mode back.
"""

import stat

_PERMISSION_BITS: tuple[int, ...] = (
    stat.S_IRUSR,
    stat.S_IWUSR,
    stat.S_IXUSR,
    stat.S_IRGRP,
    stat.S_IWGRP,
    stat.S_IXGRP,
    stat.S_IROTH,
    stat.S_IWOTH,
    stat.S_IXOTH,
)
_PERMISSION_CHARS = "rwx" * 3


def encode(mode: int) -> str:
    """Render a mode as a ten-character symbolic permission string.

    Only the directory flag is kept as file type; everything else
    gets ``-``.

    Args:
        mode: Mode as returned by os.stat (file type bits optional).

    Returns:
        String such as ``drwxr-xr-x`` or ``-rw-r--r--``.
    """
    type_flag = "d" if stat.S_ISDIR(mode) else "-"
    chars = [
        char if mode & bit else "-"
        for bit, char in zip(_PERMISSION_BITS, _PERMISSION_CHARS, strict=True)
    ]
    return type_flag + "".join(chars)


def decode(symbolic: str) -> int:
    """Map a symbolic permission string back to its numeric mode.

    A leading type character is ignored when the string is ten
    characters long. Characters other than r, w and x contribute no
    bits.

    Args:
        symbolic: Permission string, with or without the type flag.

    Returns:
        Permission bits only, e.g. 0o644.
    """
    chars = symbolic[1:] if len(symbolic) == 10 else symbolic
    mode = 0
    for char, bit in zip(chars, _PERMISSION_BITS, strict=False):
        if char in "rwx":
            mode |= bit
    return mode


def to_octal(mode: int) -> str:
    """Format permission bits as a three-digit octal string (``644``)."""
    return f"{stat.S_IMODE(mode) & 0o777:03o}"
