"""node.js package populator."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Dict

from ..errors import ManifestError, ScanError
from ..pathutil import dir_has_file, has_any_suffix, to_posix
from ..units import NodeJSPackage
from ..walk import WalkControl, WalkEntry, walk_tree
from .base import UnitBuilder

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import NodeJSPackageConfig, ScanConfig

MANIFEST = "package.json"
MODULE_CACHE_DIR = "node_modules"

LIB = "lib"
SCRIPT = "script"
SUPPORT = "support"
EXAMPLE = "example"
TEST = "test"
VENDOR = "vendor"
GENERATED = "generated"

_CATEGORY_FIELDS: Dict[str, str] = {
    LIB: "lib_files",
    SCRIPT: "script_files",
    SUPPORT: "support_files",
    EXAMPLE: "example_files",
    TEST: "test_files",
    VENDOR: "vendor_files",
    GENERATED: "generated_files",
}


def classify_js_file(rel_path: str, rules: "NodeJSPackageConfig") -> str:
    """Return the category of a .js file given its package-relative path.

    Vendored and generated files are recognised first across every path
    segment, so ``examples/vendor/x.js`` is vendor, not an example. The
    remaining categories are then tried segment by segment, script before
    example before test before support; the first hit wins.
    """
    parts = rel_path.split("/")
    filename = parts[-1]

    if any(part in rules.vendor_dirs for part in parts):
        return VENDOR
    if any(part in rules.generated_dirs for part in parts) or has_any_suffix(
        rel_path, rules.generated_suffixes
    ):
        return GENERATED

    is_test_file = has_any_suffix(rel_path, rules.test_suffixes)
    is_support_file = filename in rules.support_filenames
    for part in parts:
        if part in rules.script_dirs:
            return SCRIPT
        if part in rules.example_dirs:
            return EXAMPLE
        if part in rules.test_dirs or is_test_file:
            return TEST
        if part in rules.support_dirs or is_support_file:
            return SUPPORT
    return LIB


class NodeJSPackageBuilder(UnitBuilder):
    """Reads package.json and sorts the package's .js files into categories."""

    def build(self, abs_path: str, rel_path: str, config: "ScanConfig") -> NodeJSPackage:
        package = NodeJSPackage(dir=rel_path, package_json=self._read_manifest(abs_path))
        rules = config.node

        def _enter(path: str, name: str) -> bool:
            if name == MODULE_CACHE_DIR:
                return False
            # Nested packages are scanned as units of their own.
            return not self._has_manifest(path)

        def _visit(entry: WalkEntry) -> WalkControl:
            if not entry.is_dir and entry.name.endswith(".js"):
                relative = to_posix(os.path.relpath(entry.path, abs_path))
                category = classify_js_file(relative, rules)
                getattr(package, _CATEGORY_FIELDS[category]).append(relative)
            return WalkControl.CONTINUE

        walk_tree(abs_path, _visit, enter=_enter)
        return package

    @staticmethod
    def _read_manifest(directory: str) -> bytes:
        path = os.path.join(directory, MANIFEST)
        try:
            with open(path, "rb") as handle:
                return handle.read()
        except OSError as exc:
            raise ManifestError(path, exc.strerror or str(exc)) from exc

    @staticmethod
    def _has_manifest(directory: str) -> bool:
        try:
            return dir_has_file(directory, MANIFEST)
        except OSError as exc:
            raise ScanError(f"stat {os.path.join(directory, MANIFEST)}: {exc}") from exc


__all__ = [
    "EXAMPLE",
    "GENERATED",
    "LIB",
    "NodeJSPackageBuilder",
    "SCRIPT",
    "SUPPORT",
    "TEST",
    "VENDOR",
    "classify_js_file",
]
