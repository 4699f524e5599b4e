from __future__ import annotations

import io
import os
import stat
from collections import deque
from typing import BinaryIO

from dissect.fsemu.exceptions import BadFileModeError
from dissect.fsemu.helpers import fsutil


class FileInfo:
    """Information about a filesystem entry, as returned by ``stat``, ``lstat`` and directory listings."""

    __slots__ = ("name", "path", "st")

    def __init__(self, name: str, path: str, st: os.stat_result):
        self.name = name
        self.path = path
        self.st = st

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.path!r} mode={self.mode:#o} size={self.size}>"

    @property
    def mode(self) -> int:
        return self.st.st_mode

    @property
    def size(self) -> int:
        return self.st.st_size

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.st.st_mode)

    def is_file(self) -> bool:
        return stat.S_ISREG(self.st.st_mode)

    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.st.st_mode)


class FileDescriptor(io.RawIOBase):
    """A readable handle on a filesystem entry that can also list directories."""

    def readdir(self, n: int = -1) -> list[FileInfo]:
        """List the entries of the directory this descriptor was opened on.

        Args:
            n: If larger than zero, return at most ``n`` entries. Otherwise return all remaining entries.
        """
        raise NotImplementedError

    def readable(self) -> bool:
        return True


class Filesystem:
    """Base class for filesystems.

    This is the interface code can be written against to be able to swap the real filesystem for a virtual one
    in tests.
    """

    __type__: str = None
    """A short string identifying the type of filesystem."""

    def __init__(self) -> None:
        if self.__type__ is None:
            raise NotImplementedError(f"{self.__class__.__name__} must define __type__")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"

    def realpath(self, path: str) -> str:
        """Return the canonical path of ``path``, with all symlinks resolved.

        Args:
            path: The path to resolve. Must exist.
        """
        raise NotImplementedError

    def mkdir(self, path: str, mode: int = 0o777) -> None:
        """Create a single directory. The parent directory must exist."""
        raise NotImplementedError

    def makedirs(self, path: str, mode: int = 0o777) -> None:
        """Create a directory and any missing parents. It is not an error if the directory already exists."""
        raise NotImplementedError

    def lstat(self, path: str) -> FileInfo:
        """Return information about ``path``, without resolving a symlink in its last component."""
        raise NotImplementedError

    def open(self, path: str) -> FileDescriptor:
        """Open ``path`` for reading, resolving symlinks."""
        raise NotImplementedError

    def stat(self, path: str) -> FileInfo:
        """Return information about ``path``, resolving symlinks."""
        raise NotImplementedError


class OsFileDescriptor(FileDescriptor):
    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self.fh: BinaryIO | None = None
        self._entries: deque[os.DirEntry] | None = None

        if not os.path.isdir(path):
            self.fh = open(path, "rb")  # noqa: SIM115

    def readinto(self, b: bytearray) -> int:
        if self.fh is None:
            raise BadFileModeError(f"{self.path!r} is a directory")
        return self.fh.readinto(b)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if self.fh is None:
            raise BadFileModeError(f"{self.path!r} is a directory")
        return self.fh.seek(offset, whence)

    def seekable(self) -> bool:
        return self.fh is not None

    def readdir(self, n: int = -1) -> list[FileInfo]:
        if self.fh is not None:
            raise BadFileModeError(f"{self.path!r} is not a directory")

        if self._entries is None:
            with os.scandir(self.path) as it:
                self._entries = deque(it)

        count = len(self._entries) if n <= 0 else min(n, len(self._entries))
        result = []
        for _ in range(count):
            entry = self._entries.popleft()
            result.append(FileInfo(entry.name, entry.path, entry.stat(follow_symlinks=False)))
        return result

    def close(self) -> None:
        if self.fh is not None:
            self.fh.close()
        super().close()


class OsFilesystem(Filesystem):
    """A filesystem backed by the operating system."""

    __type__ = "os"

    def realpath(self, path: str) -> str:
        # os.path.realpath doesn't support strict before Python 3.10
        os.stat(path)
        return os.path.realpath(path)

    def mkdir(self, path: str, mode: int = 0o777) -> None:
        os.mkdir(path, mode)

    def makedirs(self, path: str, mode: int = 0o777) -> None:
        os.makedirs(path, mode, exist_ok=True)

    def lstat(self, path: str) -> FileInfo:
        return FileInfo(fsutil.basename(path), path, os.lstat(path))

    def open(self, path: str) -> OsFileDescriptor:
        return OsFileDescriptor(path)

    def stat(self, path: str) -> FileInfo:
        return FileInfo(fsutil.basename(path), path, os.stat(path))
