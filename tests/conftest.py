from __future__ import annotations

import pytest

from dissect.fsemu.virtual import VirtualFile, VirtualFilesystem


class InjectedError(Exception):
    pass


@pytest.fixture
def injected() -> InjectedError:
    return InjectedError("injected")


@pytest.fixture
def vfs(injected: InjectedError) -> VirtualFilesystem:
    return VirtualFilesystem(
        {
            "/path/to/some/file": VirtualFile.file(b"some content"),
            "/path/to/some/empty": VirtualFile.file(),
            "/path/to/empty_dir": VirtualFile.directory(),
            "/dirlink1": VirtualFile.symlink("/path/to/some"),
            "/dirlink2": VirtualFile.symlink("dirlink1"),
            "/filelink1": VirtualFile.symlink("/path/to/some/file"),
            "/filelink2": VirtualFile.symlink("filelink1"),
            "/path/to/rellink": VirtualFile.symlink("some/file"),
            "/dangling": VirtualFile.symlink("/does/not/exist"),
            "/faulty/file": VirtualFile.file(b"unreachable", error=injected),
            "/faulty_dir": VirtualFile.directory(error=injected),
            "/faulty_dir/child": VirtualFile.file(b"child"),
            "/faulty_link": VirtualFile.symlink("/path/to/some/file", error=injected),
            "/loop1": VirtualFile.symlink("/loop2"),
            "/loop2": VirtualFile.symlink("/loop1"),
        }
    )
