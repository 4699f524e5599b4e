from __future__ import annotations

import stat
from typing import TYPE_CHECKING, Union

from dissect.fsemu.exceptions import BadFileModeError

if TYPE_CHECKING:
    from collections.abc import Iterator

Payload = Union[bytes, str, dict[str, "Node"]]


class Node:
    """A single entry in the virtual filesystem tree.

    The payload depends on the type of the node: a directory holds its children in insertion order, a regular
    file holds its content and a symlink holds its target path. Symlinks are never followed here, they are
    only resolved by name when walking the tree.
    """

    __slots__ = ("_payload", "error", "mode", "name")

    def __init__(self, name: str, mode: int, error: Exception | None = None, payload: Payload | None = None):
        self.name = name
        self.mode = mode
        self.error = error
        self._payload = payload if payload is not None else _default_payload(mode)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r} mode={self.mode:#o}>"

    @classmethod
    def directory(cls, name: str, mode: int = stat.S_IFDIR) -> Node:
        return cls(name, mode, payload={})

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    def is_file(self) -> bool:
        return stat.S_ISREG(self.mode)

    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)

    @property
    def size(self) -> int:
        if self.is_dir():
            return 0
        return len(self._payload)

    @property
    def content(self) -> bytes:
        if not self.is_file():
            raise BadFileModeError(f"{self.name!r} is not a regular file")
        return self._payload

    @property
    def target(self) -> str:
        if not self.is_symlink():
            raise BadFileModeError(f"{self.name!r} is not a symlink")
        return self._payload

    @property
    def children(self) -> dict[str, Node]:
        if not self.is_dir():
            raise BadFileModeError(f"{self.name!r} is not a directory")
        return self._payload

    def iterdir(self) -> Iterator[Node]:
        yield from self.children.values()

    def lookup(self, name: str) -> Node | None:
        return self.children.get(name)

    def append(self, child: Node) -> None:
        children = self.children
        if child.name in children:
            raise ValueError(f"{self.name!r} already contains an entry named {child.name!r}")
        children[child.name] = child

    def update(self, mode: int, error: Exception | None, payload: Payload | None = None) -> None:
        """Replace the attributes of this node.

        Directories keep their children. Any other node gets ``payload`` as its new content or target.
        """
        self.mode = mode
        self.error = error
        if not self.is_dir():
            self._payload = payload if payload is not None else _default_payload(mode)


def _default_payload(mode: int) -> Payload:
    if stat.S_ISDIR(mode):
        return {}
    if stat.S_ISLNK(mode):
        return ""
    return b""
