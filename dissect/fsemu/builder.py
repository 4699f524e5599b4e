"""Grafting of virtual file descriptions onto a node tree."""

from __future__ import annotations

import stat
from typing import TYPE_CHECKING

from dissect.fsemu.exceptions import NotADirectoryError, TypeConflictError
from dissect.fsemu.helpers import fsutil
from dissect.fsemu.helpers.logging import get_logger
from dissect.fsemu.node import Node

if TYPE_CHECKING:
    from dissect.fsemu.resolver import Resolution
    from dissect.fsemu.virtual import VirtualFile

log = get_logger(__name__)


def build(resolution: Resolution, vfile: VirtualFile) -> Node:
    """Make sure a node described by ``vfile`` exists where ``resolution`` ended.

    ``resolution`` must come from a walk that ignored injected errors and did not resolve symlinks, so the
    only errors it can hold are a missing entry or a non-directory in the way.

    Raises:
        TypeConflictError: If an existing non-directory is in the way, or the existing entry disagrees with
                           ``vfile`` about being a directory. The tree is left untouched.

    Returns:
        The created or updated node.
    """
    vfile.file_type()

    if isinstance(resolution.error, NotADirectoryError):
        raise TypeConflictError(
            f"{resolution.path!r} is not a directory, but {resolution.remainder!r} requires it to be one",
            cause=resolution.error,
        )

    if resolution.remainder_components():
        return create_children(resolution.node, resolution.remainder, vfile)

    node = resolution.node
    if node.is_dir() != vfile.is_dir():
        raise TypeConflictError(
            f"{resolution.path!r} already exists and {'is' if node.is_dir() else 'is not'} a directory"
        )

    update(node, vfile)
    return node


def create_children(parent: Node, remainder: str, vfile: VirtualFile, parent_mode: int = stat.S_IFDIR) -> Node:
    """Create the missing path ``remainder`` below ``parent``.

    Every intermediate component becomes a directory with ``parent_mode``, the last component becomes a node as
    described by ``vfile``.
    """
    names = [name for name in remainder.split("/") if name]
    for name in names:
        fsutil.validate_name(name)

    node = parent
    for name in names[:-1]:
        child = Node.directory(name, parent_mode)
        node.append(child)
        log.debug("Created intermediate directory %r in %r", name, node.name)
        node = child

    child = Node(names[-1], vfile.node_mode(), vfile.error, vfile.payload())
    node.append(child)
    log.debug("Created %s %r in %r", _type_name(child.mode), child.name, node.name)
    return child


def update(node: Node, vfile: VirtualFile) -> None:
    """Overwrite the mode, injected error and payload of ``node`` with the values of ``vfile``."""
    node.update(vfile.node_mode(), vfile.error, None if vfile.is_dir() else vfile.payload())
    log.debug("Updated %s %r", _type_name(node.mode), node.name)


def _type_name(mode: int) -> str:
    if stat.S_ISDIR(mode):
        return "directory"
    if stat.S_ISLNK(mode):
        return "symlink"
    return "file"
