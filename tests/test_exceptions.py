from __future__ import annotations

import builtins

import pytest

from dissect.fsemu import exceptions


@pytest.mark.parametrize(
    ("exc", "std"),
    [
        (exceptions.FileNotFoundError, builtins.FileNotFoundError),
        (exceptions.FileExistsError, builtins.FileExistsError),
        (exceptions.NotADirectoryError, builtins.NotADirectoryError),
        (exceptions.SymlinkRecursionError, OSError),
    ],
)
def test_filesystem_error_subclass(exc: type[exceptions.Error], std: type[Exception]) -> None:
    assert issubclass(exc, (std, exceptions.FilesystemError))
    assert isinstance(exc(), (std, exceptions.FilesystemError))

    with pytest.raises(std):
        raise exc()


@pytest.mark.parametrize(
    "exc",
    [
        exceptions.InvalidModeError,
        exceptions.InvalidPathError,
    ],
)
def test_programmer_errors_are_value_errors(exc: type[exceptions.Error]) -> None:
    assert issubclass(exc, ValueError)
    assert not issubclass(exc, exceptions.FilesystemError)


def test_error_message() -> None:
    error = exceptions.TypeConflictError("conflict")

    assert str(error) == "conflict"
    assert isinstance(error, exceptions.FilesystemError)


def test_error_cause_and_extra() -> None:
    cause = exceptions.NotADirectoryError("not a directory")
    error = exceptions.Error("outer", cause=cause, extra=[ValueError("first"), KeyError("second")])

    assert error.__cause__ is cause
    assert str(error).startswith("outer\n\nAdditionally, the following exceptions occurred:")
    assert "ValueError: first" in str(error)
    assert "KeyError: 'second'" in str(error)
