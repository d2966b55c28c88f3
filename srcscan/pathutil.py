"""Shared filesystem and path helpers for the scanner and populators."""

from __future__ import annotations

import os
import stat
from typing import Iterable, Tuple


def has_any_suffix(value: str, suffixes: Iterable[str]) -> bool:
    """Return True when ``value`` ends with any of ``suffixes``."""
    return any(value.endswith(suffix) for suffix in suffixes)


def is_dir(path: str | os.PathLike[str]) -> bool:
    return os.path.isdir(path)


def dir_has_file(directory: str | os.PathLike[str], filename: str) -> bool:
    """Return True when ``directory`` holds a regular file named ``filename``.

    A missing entry is simply False; any other stat failure is raised so
    callers never mistake an unreadable directory for an empty one.
    """
    try:
        return stat.S_ISREG(os.stat(os.path.join(directory, filename)).st_mode)
    except FileNotFoundError:
        return False
    except NotADirectoryError:
        return False


def has_subdir(root: str, directory: str) -> Tuple[str, bool]:
    """Report whether ``directory`` lies strictly beneath ``root``.

    Returns the slash-separated remainder and a flag. Both paths are
    compared after normalisation; ``root`` itself is not its own subdir.
    """
    root = os.path.normpath(root)
    directory = os.path.normpath(directory)
    prefix = root if root.endswith(os.sep) else root + os.sep
    if not directory.startswith(prefix):
        return "", False
    return directory[len(prefix):].replace(os.sep, "/"), True


def rel_abs_path(path: str | os.PathLike[str], base: str) -> Tuple[str, str]:
    """Return ``(relative_to_base, absolute)`` for ``path``."""
    absolute = os.path.abspath(path)
    relative = os.path.relpath(absolute, base).replace(os.sep, "/")
    return relative, absolute


def to_posix(relative: str) -> str:
    return relative.replace(os.sep, "/")


__all__ = [
    "dir_has_file",
    "has_any_suffix",
    "has_subdir",
    "is_dir",
    "rel_abs_path",
    "to_posix",
]
