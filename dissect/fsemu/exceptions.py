from __future__ import annotations

import builtins
import traceback


class Error(Exception):
    """Generic dissect.fsemu error"""

    def __init__(self, message: str | None = None, cause: Exception | None = None, extra: list | None = None):
        if extra:
            exceptions = "\n\n".join(["".join(traceback.format_exception_only(type(e), e)) for e in extra])
            message = f"{message}\n\nAdditionally, the following exceptions occurred:\n\n{exceptions}"

        super().__init__(message)
        self.__cause__ = cause
        self.__extra__ = extra


class FilesystemError(Error):
    """A filesystem error occurred."""


class FileNotFoundError(FilesystemError, builtins.FileNotFoundError):
    """The requested path could not be found."""


class FileExistsError(FilesystemError, builtins.FileExistsError):
    """The requested path already exists."""


class NotADirectoryError(FilesystemError, builtins.NotADirectoryError):
    """The entry is not a directory."""


class SymlinkRecursionError(FilesystemError, OSError):
    """Too many symlinks were followed while resolving the entry."""


class TypeConflictError(FilesystemError):
    """An entry is not a directory, but another entry requires it to be one (or vice versa)."""


class BadFileModeError(FilesystemError):
    """The operation is not supported on this type of entry."""


class NotSupportedError(FilesystemError):
    """The requested operation is not supported."""


class InvalidModeError(Error, ValueError):
    """The mode of a virtual file does not describe exactly one entry type."""


class InvalidPathError(Error, ValueError):
    """A path contains a component that can't be used in a virtual filesystem."""
