from __future__ import annotations

import logging

import pytest

from dissect.fsemu.helpers.logging import TRACE_LEVEL, FilesystemLogAdapter, TraceLogger, get_logger
from dissect.fsemu.virtual import VirtualFile, VirtualFilesystem


def test_get_logger() -> None:
    log = get_logger("dissect.fsemu.test")

    assert isinstance(log, TraceLogger)
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"


def test_trace(caplog: pytest.LogCaptureFixture) -> None:
    log = get_logger("dissect.fsemu.test")

    with caplog.at_level(TRACE_LEVEL, logger="dissect.fsemu.test"):
        log.trace("Hello %s", "world")

    assert caplog.records[0].levelno == TRACE_LEVEL
    assert caplog.records[0].funcName == "test_trace"
    assert caplog.messages == ["Hello world"]


def test_filesystem_log_adapter(caplog: pytest.LogCaptureFixture) -> None:
    vfs = VirtualFilesystem()
    adapter = FilesystemLogAdapter(get_logger("dissect.fsemu.test"), {"fs": vfs})

    with caplog.at_level(logging.DEBUG, logger="dissect.fsemu.test"):
        adapter.debug("Something happened")

    assert caplog.messages == ["<VirtualFilesystem cwd='/'>: Something happened"]


def test_symlink_redirections_are_traced(caplog: pytest.LogCaptureFixture) -> None:
    vfs = VirtualFilesystem(
        {
            "/file": VirtualFile.file(),
            "/link": VirtualFile.symlink("/file"),
        }
    )

    with caplog.at_level(TRACE_LEVEL, logger="dissect.fsemu"):
        vfs.stat("/link")

    assert "Redirecting 'link' to '/file'" in caplog.messages


def test_created_entries_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    vfs = VirtualFilesystem()

    with caplog.at_level(logging.DEBUG, logger="dissect.fsemu"):
        vfs.set("/a/b", VirtualFile.file())
        vfs.set("/a/b", VirtualFile.file(b"update"))

    assert caplog.messages == [
        "Created intermediate directory 'a' in '/'",
        "Created file 'b' in 'a'",
        "Updated file 'b'",
    ]
