from dissect.fsemu.exceptions import (
    BadFileModeError,
    Error,
    FileExistsError,
    FileNotFoundError,
    FilesystemError,
    InvalidModeError,
    InvalidPathError,
    NotADirectoryError,
    NotSupportedError,
    SymlinkRecursionError,
    TypeConflictError,
)
from dissect.fsemu.filesystem import FileDescriptor, FileInfo, Filesystem, OsFileDescriptor, OsFilesystem
from dissect.fsemu.virtual import VirtualFile, VirtualFileDescriptor, VirtualFilesystem

__all__ = [
    "BadFileModeError",
    "Error",
    "FileDescriptor",
    "FileExistsError",
    "FileInfo",
    "FileNotFoundError",
    "Filesystem",
    "FilesystemError",
    "InvalidModeError",
    "InvalidPathError",
    "NotADirectoryError",
    "NotSupportedError",
    "OsFileDescriptor",
    "OsFilesystem",
    "SymlinkRecursionError",
    "TypeConflictError",
    "VirtualFile",
    "VirtualFileDescriptor",
    "VirtualFilesystem",
]
