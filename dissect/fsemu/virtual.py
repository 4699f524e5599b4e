from __future__ import annotations

import os
import stat
from dataclasses import dataclass

from dissect.util.stream import AlignedStream

from dissect.fsemu import builder, resolver
from dissect.fsemu.exceptions import (
    BadFileModeError,
    FileExistsError,
    FileNotFoundError,
    InvalidModeError,
    NotSupportedError,
)
from dissect.fsemu.filesystem import FileDescriptor, FileInfo, Filesystem
from dissect.fsemu.helpers import fsutil
from dissect.fsemu.helpers.logging import FilesystemLogAdapter, get_logger
from dissect.fsemu.node import Node, Payload
from dissect.fsemu.resolver import MAX_SYMLINK_DEPTH, Resolution

log = get_logger(__name__)

_FILE_TYPES = (stat.S_IFDIR, stat.S_IFREG, stat.S_IFLNK)


@dataclass(frozen=True)
class VirtualFile:
    """Description of a file, directory or symlink in a :class:`VirtualFilesystem`.

    If ``error`` is set, every operation that reaches the entry fails with that exception. If ``mode`` is a regular
    file, ``content`` is the content of the file. If ``mode`` is a symlink, ``content`` is the target of the link.
    A ``mode`` without file type bits describes a regular file.
    """

    content: bytes | str = b""
    mode: int = stat.S_IFREG
    error: Exception | None = None

    @classmethod
    def file(cls, content: bytes = b"", error: Exception | None = None) -> VirtualFile:
        return cls(content, stat.S_IFREG, error)

    @classmethod
    def directory(cls, mode: int = 0, error: Exception | None = None) -> VirtualFile:
        return cls(b"", stat.S_IFDIR | stat.S_IMODE(mode), error)

    @classmethod
    def symlink(cls, target: str, error: Exception | None = None) -> VirtualFile:
        return cls(target, stat.S_IFLNK, error)

    def file_type(self) -> int:
        """Return the ``S_IFMT`` file type this :class:`VirtualFile` describes.

        Raises:
            InvalidModeError: If the mode does not describe exactly one of a directory, regular file or symlink.
        """
        fmt = stat.S_IFMT(self.mode) or stat.S_IFREG
        if fmt not in _FILE_TYPES:
            raise InvalidModeError(f"Mode {self.mode:#o} is not one of a directory, regular file or symlink")
        return fmt

    def node_mode(self) -> int:
        return self.file_type() | stat.S_IMODE(self.mode)

    def is_dir(self) -> bool:
        return self.file_type() == stat.S_IFDIR

    def payload(self) -> Payload:
        fmt = self.file_type()
        if fmt == stat.S_IFDIR:
            return {}

        if fmt == stat.S_IFLNK:
            return self.content.decode() if isinstance(self.content, bytes) else self.content

        return self.content.encode() if isinstance(self.content, str) else bytes(self.content)


class VirtualFileDescriptor(AlignedStream, FileDescriptor):
    """A read handle on an entry of a :class:`VirtualFilesystem`.

    Reads always see the current content of the entry. Directories can't be read, but they can be listed with
    :meth:`readdir`.
    """

    def __init__(self, fs: VirtualFilesystem, node: Node, path: str):
        self.fs = fs
        self.node = node
        self.path = path
        self._content = node.content if node.is_file() else b""
        super().__init__(len(self._content))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.path!r}>"

    def _read(self, offset: int, length: int) -> bytes:
        return self._content[offset : offset + length]

    def read(self, n: int = -1) -> bytes:
        if not self.node.is_file():
            raise BadFileModeError(f"{self.path!r} is not a regular file")

        content = self.node.content
        if content is not self._content:
            # Replaced by a set, drop the buffered block of the old content
            self._content = content
            self.size = len(content)
            self._buf = None

        return super().read(n)

    def readdir(self, n: int = -1) -> list[FileInfo]:
        if not self.node.is_dir():
            raise BadFileModeError(f"{self.path!r} is not a directory")

        if n > 0:
            raise NotSupportedError("Reading a limited number of directory entries is not supported")

        return [self.fs._info(child, fsutil.join(self.path, child.name)) for child in self.node.iterdir()]


class VirtualFilesystem(Filesystem):
    """An in-memory filesystem to use in place of the real one in tests.

    Relative paths are interpreted relative to ``cwd``. Entries can carry an injected error, which makes every
    operation that reaches them fail with that error.

    Args:
        data: A mapping of path to :class:`VirtualFile` to populate the filesystem with.
        cwd: The absolute path to prefix relative paths with.
        max_links: The maximum number of symlinks to follow while resolving a single path.
    """

    __type__ = "virtual"

    def __init__(
        self,
        data: dict[str, VirtualFile] | None = None,
        *,
        cwd: str = "/",
        max_links: int = MAX_SYMLINK_DEPTH,
    ):
        super().__init__()
        if not cwd.startswith("/"):
            raise ValueError(f"cwd must be an absolute path, got {cwd!r}")

        self.cwd = cwd if cwd.endswith("/") else cwd + "/"
        self.max_links = max_links
        self.root = Node.directory("/")
        self.log = FilesystemLogAdapter(log, {"fs": self})

        for path, vfile in (data or {}).items():
            self.set(path, vfile)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} cwd={self.cwd!r}>"

    def abspath(self, path: str) -> str:
        if not path or path[0] != "/":
            return self.cwd + path
        return path

    def _find(self, path: str, **kwargs) -> Resolution:
        return resolver.find(self.root, self.abspath(path), max_links=self.max_links, **kwargs)

    def _info(self, node: Node, path: str) -> FileInfo:
        st = os.stat_result((node.mode, fsutil.generate_addr(path), id(self), 1, 0, 0, node.size, 0, 0, 0))
        return FileInfo(node.name, path, st)

    def set(self, path: str, vfile: VirtualFile) -> None:
        """Create or update the entry at ``path``.

        Missing parent directories are created. If the entry already exists, its mode, injected error and content
        or symlink target are replaced with the values from ``vfile``.

        Raises:
            InvalidModeError: If ``vfile`` does not describe exactly one type of entry.
            InvalidPathError: If ``path`` contains a ``.`` or ``..`` component.
            TypeConflictError: If a parent of ``path`` exists and is not a directory, or the entry exists and is a
                               directory while ``vfile`` is not (or vice versa).
        """
        vfile.file_type()
        resolution = self._find(path, ignore_injected_errors=True, resolve_symlinks=False)
        builder.build(resolution, vfile)
        self.log.trace("Set %r to %r", path, vfile)

    def open(self, path: str) -> VirtualFileDescriptor:
        resolution = self._find(path)
        return VirtualFileDescriptor(self, resolution.unwrap(), resolution.path)

    def stat(self, path: str) -> FileInfo:
        resolution = self._find(path)
        return self._info(resolution.unwrap(), resolution.path)

    def lstat(self, path: str) -> FileInfo:
        resolution = self._find(path, follow_symlinks=False)
        return self._info(resolution.unwrap(), resolution.path)

    def realpath(self, path: str) -> str:
        resolution = self._find(path)
        resolution.unwrap()
        return resolution.path

    def mkdir(self, path: str, mode: int = 0o777) -> None:
        resolution = self._find(path, follow_symlinks=False)
        if resolution.error is None:
            raise FileExistsError(f"{resolution.path!r} already exists")

        if not _is_missing(resolution) or len(resolution.remainder_components()) != 1:
            raise resolution.error

        builder.create_children(resolution.node, resolution.remainder, VirtualFile.directory(mode))

    def makedirs(self, path: str, mode: int = 0o777) -> None:
        resolution = self._find(path)
        if resolution.error is None:
            if not resolution.node.is_dir():
                raise FileExistsError(f"{resolution.path!r} already exists and is not a directory")
            return

        if not _is_missing(resolution):
            raise resolution.error

        vfile = VirtualFile.directory(mode)
        builder.create_children(resolution.node, resolution.remainder, vfile, vfile.node_mode())


def _is_missing(resolution: Resolution) -> bool:
    return not resolution.injected and isinstance(resolution.error, FileNotFoundError)
