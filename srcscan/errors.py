"""Exceptions raised while scanning a tree for source units."""

from __future__ import annotations


class ScanError(RuntimeError):
    """Raised when the tree (or part of it) cannot be read during a scan."""


class ManifestError(ScanError):
    """Raised when a unit's manifest file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"read {path}: {reason}")
        self.path = path


class GoPackageError(ScanError):
    """Raised when the Go build-info provider cannot load a package."""


__all__ = ["GoPackageError", "ManifestError", "ScanError"]
