"""Path resolution on a tree of virtual filesystem nodes."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dissect.fsemu.exceptions import FileNotFoundError, NotADirectoryError, SymlinkRecursionError
from dissect.fsemu.helpers import fsutil
from dissect.fsemu.helpers.logging import get_logger

if TYPE_CHECKING:
    from dissect.fsemu.node import Node

log = get_logger(__name__)

MAX_SYMLINK_DEPTH = 255


@dataclass
class Resolution:
    """The outcome of walking a path.

    ``node`` is the last node that was reached and ``remainder`` the part of the path that could not be walked,
    starting at the component that failed. On success ``error`` is ``None`` and ``remainder`` is empty.
    """

    node: Node
    remainder: str = ""
    error: Exception | None = None
    parts: list[str] = field(default_factory=list)
    injected: bool = False
    """Whether :attr:`error` is an error that was injected into a node."""

    @property
    def path(self) -> str:
        """The canonical absolute path of :attr:`node`."""
        return "/" + "/".join(self.parts)

    def remainder_components(self) -> list[str]:
        return [name for name in self.remainder.split("/") if name]

    def unwrap(self) -> Node:
        """Return the resolved node, or raise the error resolution ended with."""
        if self.error is not None:
            raise self.error
        return self.node


def find(
    root: Node,
    path: str,
    *,
    ignore_injected_errors: bool = False,
    resolve_symlinks: bool = True,
    follow_symlinks: bool = True,
    max_links: int = MAX_SYMLINK_DEPTH,
) -> Resolution:
    """Walk ``path`` starting at ``root``.

    Args:
        root: The root directory node. ``path`` is interpreted relative to it and absolute symlink targets
              restart here.
        path: An absolute path.
        ignore_injected_errors: Don't fail on nodes that carry an injected error.
        resolve_symlinks: Redirect the walk when a symlink is encountered. If ``False``, symlinks are treated
                          like any other node.
        follow_symlinks: Also redirect on a symlink in the final position of the path. A trailing separator
                         always counts as a following component.
        max_links: The maximum number of redirections before giving up with :class:`SymlinkRecursionError`.

    Raises:
        InvalidPathError: If a component of the path (or of a followed symlink target) is ``.`` or ``..``.

    Returns:
        A :class:`Resolution`. Errors are never raised, they are returned in :attr:`Resolution.error`.
    """
    node = root
    parts = []
    remaining = deque(fsutil.split_components(path))
    links = 0

    def fail(name: str, error: Exception, injected: bool = False) -> Resolution:
        remaining.appendleft(name)
        return Resolution(node, "/".join(remaining), error, parts, injected)

    while remaining:
        if not ignore_injected_errors and node.error is not None:
            return Resolution(node, "/".join(remaining), node.error, parts, injected=True)

        name = remaining.popleft()
        if not name:
            continue

        fsutil.validate_name(name)
        entry_path = "/" + "/".join([*parts, name])

        if not node.is_dir():
            return fail(name, NotADirectoryError(f"{entry_path!r}: not a directory"))

        child = node.lookup(name)
        if child is None:
            return fail(name, FileNotFoundError(f"{entry_path!r}: no such file or directory"))

        if child.is_symlink() and resolve_symlinks and (follow_symlinks or remaining):
            if not ignore_injected_errors and child.error is not None:
                return fail(name, child.error, injected=True)

            links += 1
            if links > max_links:
                return fail(name, SymlinkRecursionError(f"{entry_path!r}: too many levels of symlinks"))

            target = child.target
            log.trace("Redirecting %r to %r", name, target)
            if target.startswith("/"):
                node = root
                parts = []
            remaining.extendleft(reversed(fsutil.split_components(target)))
            continue

        node = child
        parts.append(name)

    if not ignore_injected_errors and node.error is not None:
        return Resolution(node, "", node.error, parts, injected=True)

    return Resolution(node, "", None, parts)
