"""Base classes and helpers shared by unit populators."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

from ..pathutil import is_dir, to_posix
from ..units import Unit
from ..walk import WalkControl, WalkEntry, walk_tree

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import ScanConfig


class UnitBuilder(ABC):
    """Contract for populators that turn a matched path into a source unit."""

    @abstractmethod
    def build(self, abs_path: str, rel_path: str, config: "ScanConfig") -> Unit:
        """Return the unit rooted at ``abs_path``.

        ``rel_path`` is the same location relative to the scan base and is
        what the unit reports as its path.
        """


def collect_files(unit_dir: str, base_dir: str, suffix: str) -> List[str]:
    """Return files ending in ``suffix`` beneath ``base_dir``, relative to ``unit_dir``.

    A missing ``base_dir`` yields an empty list.
    """
    files: List[str] = []
    if not is_dir(base_dir):
        return files

    def _visit(entry: WalkEntry) -> WalkControl:
        if not entry.is_dir and entry.name.endswith(suffix):
            files.append(to_posix(os.path.relpath(entry.path, unit_dir)))
        return WalkControl.CONTINUE

    walk_tree(base_dir, _visit)
    return files


__all__ = ["UnitBuilder", "collect_files"]
