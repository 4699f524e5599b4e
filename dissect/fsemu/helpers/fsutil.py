"""Path related utilities for the virtual filesystem."""

from __future__ import annotations

import hashlib
import posixpath

from dissect.fsemu.exceptions import InvalidPathError

__all__ = [
    "basename",
    "generate_addr",
    "is_path_separator_windows",
    "join",
    "split_components",
    "validate_name",
]

SEPARATOR = "/"


def generate_addr(path: str) -> int:
    """Generate a stable inode-like number for a canonical path."""
    return int(hashlib.sha256(path.encode()).hexdigest()[:8], 16)


def join(*args) -> str:
    return posixpath.join(*args)


def basename(path: str) -> str:
    return posixpath.basename(path.rstrip(SEPARATOR)) or SEPARATOR


def split_components(path: str) -> list[str]:
    """Split a path into its components, keeping empty ones.

    A single leading separator is dropped, so ``"/a//b/"`` becomes ``["a", "", "b", ""]``.
    """
    if path.startswith(SEPARATOR):
        path = path[1:]
    return path.split(SEPARATOR)


def validate_name(name: str) -> None:
    """Raise :class:`InvalidPathError` for the relative components ``.`` and ``..``."""
    if name in (".", ".."):
        raise InvalidPathError(f"Path component {name!r} is not allowed, paths must not contain '.' or '..'")


def is_path_separator_windows(c: str | int) -> bool:
    """Return whether ``c`` is a forward or backward slash.

    Args:
        c: A single character or the ASCII value of one.
    """
    if isinstance(c, int):
        c = chr(c)
    return c in ("/", "\\")
