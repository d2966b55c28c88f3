"""Depth-first directory walking with explicit per-entry walk control."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .errors import ScanError


class WalkControl(Enum):
    """What the walker does after a visitor has seen an entry.

    Aborting is signalled by raising from the visitor.
    """

    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"


@dataclass(frozen=True)
class WalkEntry:
    """A directory or regular file reached by :func:`walk_tree`."""

    path: str
    name: str
    is_dir: bool
    names: Tuple[str, ...] = ()


Visitor = Callable[[WalkEntry], WalkControl]
EnterFilter = Callable[[str, str], bool]


def list_dir(directory: str) -> List[os.DirEntry[str]]:
    """Return the entries of ``directory`` sorted by name."""
    try:
        with os.scandir(directory) as iterator:
            return sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        raise ScanError(f"read directory {directory}: {exc}") from exc


def walk_tree(root: str, visit: Visitor, enter: Optional[EnterFilter] = None) -> None:
    """Walk ``root`` depth-first, pre-order, siblings in name order.

    ``enter(path, name)`` is asked about every directory below ``root``
    before it is read; when it returns False the directory is neither
    listed nor visited.

    Directories are visited with the names of their immediate children,
    read with a single listing. Symbolic links and special files are not
    visited, and linked directories are never followed. Any read failure
    raises :class:`ScanError`.
    """
    stack: List[Tuple[str, str, bool]] = [(root, os.path.basename(root), True)]
    while stack:
        path, name, is_dir = stack.pop()
        if not is_dir:
            visit(WalkEntry(path=path, name=name, is_dir=False))
            continue

        children = list_dir(path)
        entry = WalkEntry(
            path=path,
            name=name,
            is_dir=True,
            names=tuple(child.name for child in children),
        )
        if visit(entry) is WalkControl.SKIP_SUBTREE:
            continue

        pending: List[Tuple[str, str, bool]] = []
        for child in children:
            try:
                child_is_dir = child.is_dir(follow_symlinks=False)
                if not child_is_dir and not child.is_file(follow_symlinks=False):
                    continue
            except OSError as exc:
                raise ScanError(f"stat {child.path}: {exc}") from exc
            if child_is_dir and enter is not None and not enter(child.path, child.name):
                continue
            pending.append((child.path, child.name, child_is_dir))
        stack.extend(reversed(pending))


__all__ = ["EnterFilter", "Visitor", "WalkControl", "WalkEntry", "list_dir", "walk_tree"]
